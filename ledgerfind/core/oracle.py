from typing import Protocol, Tuple

from .rpc_client import LedgerNotFoundError, LedgerRpcClient, LedgerRpcError


class TimeOracle(Protocol):
    """Resolves ledger sequence numbers to close times. Failures are raised."""

    def fetch_close_time(self, sequence: int) -> int: ...

    def fetch_latest_validated(self) -> Tuple[int, int]: ...


class RpcTimeOracle:
    """TimeOracle backed by the `ledger` JSON-RPC method."""

    def __init__(self, client: LedgerRpcClient):
        self.client = client

    def fetch_close_time(self, sequence: int) -> int:
        # ledger_index 0 is not a ledger; negative guesses come from extrapolation
        if sequence < 1:
            raise LedgerNotFoundError(f"No ledger with sequence {sequence}")
        header = self.client.ledger_header(sequence)
        return _int_field(header, "close_time")

    def fetch_latest_validated(self) -> Tuple[int, int]:
        header = self.client.ledger_header("validated")
        return _int_field(header, "ledger_index"), _int_field(header, "close_time")


def _int_field(header: dict, key: str) -> int:
    # ledger_index comes back as a string on older API versions
    try:
        return int(header[key])
    except (KeyError, TypeError, ValueError) as e:
        raise LedgerRpcError(f"Ledger header has no usable {key!r}", reply=header) from e
