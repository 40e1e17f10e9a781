# ledgerfind/core/rpc_client.py
import requests
from typing import Any, Dict, Union
from .xrpl_config import LEDGER_RPC_URL, LEDGER_RPC_TIMEOUT, LEDGER_RPC_VERIFY_TLS
from ..logger import get_logger

logger = get_logger(__name__)


class LedgerRpcError(RuntimeError):
    """The node could not answer: transport failure, bad payload or non-success status."""

    def __init__(self, message: str, reply: Any = None):
        super().__init__(message)
        self.reply = reply


class LedgerNotFoundError(LedgerRpcError):
    """The node does not have (or has not validated) the requested ledger."""


class LedgerRpcClient:
    """Thin wrapper over a ledger node's JSON-RPC port. One POST per call, no retries."""

    def __init__(
        self,
        url: str = LEDGER_RPC_URL,
        timeout: float = LEDGER_RPC_TIMEOUT,
        verify_tls: bool = LEDGER_RPC_VERIFY_TLS,
    ):
        self.url = url
        self.timeout = timeout
        self.verify_tls = verify_tls

    def call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        payload = {"method": method, "params": [params]}
        try:
            r = requests.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json", "User-Agent": "ledgerfind"},
                timeout=self.timeout,
                verify=self.verify_tls,
            )
            r.raise_for_status()
            data = r.json()
        except requests.RequestException as e:
            raise LedgerRpcError(f"{method} request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise LedgerRpcError(f"{method} reply is not JSON: {e}") from e

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            raise LedgerRpcError("Result is not object", reply=data)
        status = result.get("status")
        if status != "success":
            error = result.get("error")
            message = f"Result is {status!r}, not success ({error or 'no error code'})"
            logger.debug(f"[RPC FAIL] {method} {params} -> {result}")
            if error == "lgrNotFound":
                raise LedgerNotFoundError(message, reply=result)
            raise LedgerRpcError(message, reply=result)
        return result

    def ledger_header(self, ledger_index: Union[int, str]) -> Dict[str, Any]:
        """Header of a ledger by sequence number, or of "validated"/"closed"/"current"."""
        result = self.call("ledger", {"ledger_index": ledger_index})
        header = result.get("ledger")
        if not isinstance(header, dict):
            raise LedgerRpcError(f"No ledger object for {ledger_index!r}", reply=result)
        return header
