"""Kernel log acquisition.

Two sources share one capability: return raw lines bounded by a ``--since``
expression. :func:`fetch_raw_batch` is the boundary the pipeline calls; it
never raises and degrades every failure to an empty batch.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Protocol

import aiofiles

from .config import RunConfig
from .errors import DependencyMissingError
from .models import Mode

logger = logging.getLogger(__name__)

DEV_LOG_FILE = Path("journalctl_output.txt")
JOURNAL_TIMEOUT_S = 60.0


class LogSource(Protocol):
    """Source interface: return raw log lines newer than ``since``."""

    async def fetch(self, since: str) -> list[str]:
        """Fetch lines in source order."""
        ...


def _split_lines(text: str) -> list[str]:
    return [line.rstrip("\r") for line in text.splitlines()]


class JournalLogSource:
    """Kernel ring buffer via ``journalctl -k --since``."""

    def __init__(self, command: str = "journalctl", *, timeout: float = JOURNAL_TIMEOUT_S) -> None:
        self.command = command
        self.timeout = timeout

    async def fetch(self, since: str) -> list[str]:
        exe = shutil.which(self.command)
        if exe is None:
            raise DependencyMissingError(self.command)

        logger.debug("Run %s -k --since %r", self.command, since)
        proc = await asyncio.create_subprocess_exec(
            exe,
            "-k",
            "--no-pager",
            "--since",
            since,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        try:
            out, _ = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise RuntimeError(f"{self.command} timed out after {self.timeout:g}s") from None

        if proc.returncode != 0:
            raise RuntimeError(f"{self.command} exited with status {proc.returncode}")
        return _split_lines(out.decode("utf-8", errors="replace"))


class FileLogSource:
    """Pre-captured journal output for development runs.

    The time bound is ignored; the file is assumed to hold the scenario.
    """

    def __init__(self, path: str | Path = DEV_LOG_FILE, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    async def fetch(self, since: str) -> list[str]:
        if not self.path.is_file():
            logger.debug("Development log file not found: %s", self.path)
            return []
        async with aiofiles.open(self.path, encoding=self.encoding, errors="replace") as f:
            text = await f.read()
        return _split_lines(text)


def select_log_source(config: RunConfig) -> LogSource:
    """Pick the source for the configured mode."""
    if config.mode == Mode.PRODUCTION:
        return JournalLogSource()
    return FileLogSource()


async def fetch_raw_batch(
    source: LogSource,
    since: str,
    *,
    on_dependency_missing: Callable[[str], Awaitable[object]] | None = None,
) -> list[str]:
    """Fetch lines from ``source``; failures yield ``[]`` plus a log line.

    ``on_dependency_missing`` receives the error message when the source's
    query tool is absent, so it can be surfaced beyond the log file.
    """
    try:
        return await source.fetch(since)
    except DependencyMissingError as e:
        msg = str(e)
        logger.error(msg)
        if on_dependency_missing is not None:
            await on_dependency_missing(msg)
        return []
    except (OSError, RuntimeError, UnicodeError) as e:
        logger.error("Kernel log query failed: %s", e)
        return []
