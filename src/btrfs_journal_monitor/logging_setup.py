"""Diagnostic log file setup.

Lines look like ``[2025-01-01 12:00:00] [info] message`` and are appended to a
single file; rotation is left to the host.
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "btrfs_journal_monitor"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _LowerLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = record.levelname.lower()
        return super().format(record)


def configure_logging(log_path: str | Path, *, debug: bool = False) -> logging.Logger:
    """Route the package logger to ``log_path`` in append mode.

    Raises ``OSError`` if the file cannot be opened.
    """
    handler = logging.FileHandler(Path(log_path), mode="a", encoding="utf-8")
    handler.setFormatter(_LowerLevelFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger(PACKAGE_LOGGER)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    root.propagate = False
    return root


def shutdown_logging() -> None:
    root = logging.getLogger(PACKAGE_LOGGER)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
