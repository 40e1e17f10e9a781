"""Shared fixtures: a dict-backed time oracle that records every lookup."""
from __future__ import annotations

import os

# Route package logs through the root logger so caplog sees them
os.environ.setdefault("LEDGERFIND_LOG_CAPTURE", "1")

import pytest

from ledgerfind.core.rpc_client import LedgerNotFoundError, LedgerRpcError


class FakeOracle:
    """Close times from a dict; unknown sequences fail like the node does."""

    def __init__(self, close_times: dict[int, int], latest: int | None = None):
        self.close_times = dict(close_times)
        self.latest = latest if latest is not None else max(self.close_times)
        self.calls: list[int] = []
        self.latest_calls = 0

    def fetch_close_time(self, sequence: int) -> int:
        self.calls.append(sequence)
        if sequence not in self.close_times:
            raise LedgerNotFoundError(f"No ledger with sequence {sequence}")
        return self.close_times[sequence]

    def fetch_latest_validated(self) -> tuple[int, int]:
        self.latest_calls += 1
        return self.latest, self.close_times[self.latest]


class BrokenOracle(FakeOracle):
    """Answers the latest-validated lookup, then the transport goes away."""

    def fetch_close_time(self, sequence: int) -> int:
        self.calls.append(sequence)
        raise LedgerRpcError("connection refused")


def linear_close_times(first: int = 1, last: int = 110) -> dict[int, int]:
    """closeTime = 1000 + 5 * (seq - 100)."""
    return {seq: 1000 + 5 * (seq - 100) for seq in range(first, last + 1)}


@pytest.fixture
def linear_oracle() -> FakeOracle:
    return FakeOracle(linear_close_times())


@pytest.fixture
def make_oracle():
    def _make(close_times: dict[int, int], latest: int | None = None) -> FakeOracle:
        return FakeOracle(close_times, latest)

    return _make


@pytest.fixture
def broken_oracle() -> BrokenOracle:
    return BrokenOracle(linear_close_times())
