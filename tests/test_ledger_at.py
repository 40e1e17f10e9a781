"""Tests for the ledger-at command line."""
from __future__ import annotations

import json

from ledgerfind.xrpl_utils import ledger_at

from conftest import FakeOracle, linear_close_times


class TestLedgerAt:
    def test_text_report(self, linear_oracle, capsys):
        assert ledger_at.main(["1027"], oracle=linear_oracle) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Looking for {ledger at, 1027, 2000-01-01 00:17:07 UTC}"
        assert lines[1] == "{110, 1050, 2000-01-01 00:17:30 UTC}"
        assert lines[-2] == "---"
        assert lines[-1] == "{105, 1025, 2000-01-01 00:17:05 UTC}"

    def test_json_report(self, linear_oracle, capsys):
        assert ledger_at.main(["1025", "--json"], oracle=linear_oracle) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["ledger_index"] == 105
        assert payload["close_time"] == 1025
        assert payload["exact"] is True
        assert payload["lookups"] == 3

    def test_seed_width_flag(self, capsys):
        oracle = FakeOracle(linear_close_times())
        assert ledger_at.main(["1025", "--seed-width", "3"], oracle=oracle) == 0
        assert oracle.calls == [107, 105]

    def test_clamp_flag(self, linear_oracle, capsys):
        assert ledger_at.main(["5000", "--clamp", "--json"], oracle=linear_oracle) == 0
        assert json.loads(capsys.readouterr().out)["ledger_index"] == 110

    def test_oracle_failure_exit_code(self, broken_oracle, capsys):
        assert ledger_at.main(["1025"], oracle=broken_oracle) == 1

    def test_future_target_exit_code(self, linear_oracle, capsys):
        assert ledger_at.main(["5000"], oracle=linear_oracle) == 1

    def test_bad_target(self, linear_oracle, capsys):
        assert ledger_at.main(["yesterday-ish"], oracle=linear_oracle) == 2
        assert linear_oracle.latest_calls == 0
