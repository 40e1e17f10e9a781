# logger.py
import logging
import os

from .core import time as clock

PKG_ROOT = "ledgerfind"


class UtcFormatter(logging.Formatter):
    """Render %(asctime)s as UTC ISO-8601."""

    def formatTime(self, record, datefmt=None):
        dt = clock.dt.datetime.fromtimestamp(record.created, tz=clock.dt.timezone.utc)
        return (
            dt.strftime(datefmt)
            if datefmt
            else dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        )


_CONFIGURED = False


def _running_under_pytest() -> bool:
    return "PYTEST_CURRENT_TEST" in os.environ or os.getenv("LEDGERFIND_LOG_CAPTURE") == "1"


def _ensure_pkg_logger(level=logging.INFO):
    """Configure ONLY our package root logger once; leave root/pytest alone."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    pkg_logger = logging.getLogger(PKG_ROOT)

    if _running_under_pytest():
        # caplog captures via root handlers
        pkg_logger.setLevel(level)
        pkg_logger.propagate = True
    else:
        if not pkg_logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(
                UtcFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            pkg_logger.addHandler(h)
        pkg_logger.setLevel(level)
        pkg_logger.propagate = False

    _CONFIGURED = True


def set_level(level):
    """Adjust the package root logger after the fact (CLI -d / -v)."""
    _ensure_pkg_logger()
    logging.getLogger(PKG_ROOT).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Use get_logger(__name__) everywhere in our package."""
    _ensure_pkg_logger()
    return logging.getLogger(name)
