# time.py
import datetime as dt

from dateutil import parser as dtparser

# Ledger close times count seconds from 2000-01-01T00:00:00Z
LEDGER_EPOCH = 946684800
_EPOCH_DT = dt.datetime(2000, 1, 1, tzinfo=dt.timezone.utc)


def to_unix(close_time: int) -> int:
    return close_time + LEDGER_EPOCH


def from_unix(unix_ts: float) -> int:
    return int(unix_ts) - LEDGER_EPOCH


def to_datetime(close_time: int) -> dt.datetime:
    return _EPOCH_DT + dt.timedelta(seconds=close_time)


def from_datetime(when: dt.datetime) -> int:
    if when.tzinfo is None:
        when = when.replace(tzinfo=dt.timezone.utc)
    return int((when - _EPOCH_DT).total_seconds())


def format_close_time(close_time: int) -> str:
    return to_datetime(close_time).strftime("%Y-%m-%d %H:%M:%S UTC")


def parse_target(text: str) -> int:
    """
    Turn a CLI target into ledger-epoch seconds.

    A bare integer is taken as ledger-epoch seconds already; anything else goes
    through dateutil, with naive times read as UTC.
    """
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        when = dtparser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unrecognised target time {text!r}") from e
    return from_datetime(when)
