from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from btrfs_journal_monitor.core.config import RunConfig
from btrfs_journal_monitor.core.models import Mode
from btrfs_journal_monitor.logging_setup import shutdown_logging


@dataclass(frozen=True)
class KernelLines:
    info: str = "Oct 18 10:00:01 nas kernel: BTRFS info (device sda1): scrub started"
    scan: str = "Oct 18 10:00:02 nas kernel: BTRFS: device fsid xyz scanned by mount (123)"
    error: str = (
        "Oct 18 10:00:03 nas kernel: BTRFS: error (device sda1): "
        "parent transid verify failed on 123 wanted 456 found 789"
    )

    def all(self) -> list[str]:
        return [self.info, self.scan, self.error]


class RecordingMailer:
    """In-memory mailer; optionally fails every send."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.exc = exc

    async def send(self, subject: str, recipient: str, body: str) -> None:
        self.sent.append((subject, recipient, body))
        if self.exc is not None:
            raise self.exc


class StaticSource:
    """LogSource returning fixed lines and remembering the window it saw."""

    def __init__(self, lines: list[str] | None = None, exc: Exception | None = None) -> None:
        self.lines = lines or []
        self.exc = exc
        self.calls: list[str] = []

    async def fetch(self, since: str) -> list[str]:
        self.calls.append(since)
        if self.exc is not None:
            raise self.exc
        return list(self.lines)


@pytest.fixture
def kernel_lines() -> KernelLines:
    return KernelLines()


@pytest.fixture
def recording_mailer() -> Callable[..., RecordingMailer]:
    return RecordingMailer


@pytest.fixture
def static_source() -> Callable[..., StaticSource]:
    return StaticSource


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., RunConfig]:
    def _make(**overrides: Any) -> RunConfig:
        fields: dict[str, Any] = {
            "mode": Mode.DEVELOPMENT,
            "email": "ops@example.com",
            "lookback_hours": 1,
            "lookback_minutes": 0,
            "log_path": tmp_path / "monitor.log",
        }
        fields.update(overrides)
        return RunConfig(**fields)

    return _make


@pytest.fixture
def write_kernel_log(kernel_lines: KernelLines) -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text("\n".join(kernel_lines.all()) + "\n", encoding="utf-8")

    return _write


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    shutdown_logging()
