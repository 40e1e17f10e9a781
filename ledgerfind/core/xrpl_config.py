import os
from dotenv import load_dotenv

load_dotenv()

# --- JSON-RPC endpoint (full-history node by default) ---
DEFAULT_RPC_URL = "http://s2.ripple.com:51234"
LEDGER_RPC_URL = os.getenv("LEDGER_RPC_URL") or DEFAULT_RPC_URL


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if not raw:
        return default
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise RuntimeError(f"{name} must be a boolean, got {raw!r}")


LEDGER_RPC_TIMEOUT = _int_env("LEDGER_RPC_TIMEOUT", 30)
LEDGER_RPC_VERIFY_TLS = _bool_env("LEDGER_RPC_VERIFY_TLS", True)

# --- Search ---
LEDGER_SEED_WIDTH = _int_env("LEDGER_SEED_WIDTH", 10)
if LEDGER_SEED_WIDTH < 1:
    raise RuntimeError("LEDGER_SEED_WIDTH must be at least 1")
