"""Core data models for the BTRFS journal check."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Mode(str, Enum):
    """Where kernel log lines are read from."""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class Channel(str, Enum):
    """Alert delivery channels."""

    EMAIL = "email"
    WEBHOOK = "webhook"


@dataclass(frozen=True, slots=True)
class LookbackWindow:
    """Hours + minutes to look back from now."""

    hours: int
    minutes: int


@dataclass(frozen=True, slots=True)
class AlertReport:
    """Formatted alert, built once per run when filtered lines remain."""

    host: str
    timestamp: datetime
    window: LookbackWindow
    invocation: str
    lines: tuple[str, ...]
    stage: str
    text: str


@dataclass(frozen=True, slots=True)
class NotificationOutcome:
    """Per-channel delivery result (logged, not retained)."""

    channel: Channel
    success: bool
    error_detail: str | None = None


@dataclass(frozen=True, slots=True)
class RunResult:
    """What a single monitor run did."""

    lines: list[str]
    report: AlertReport | None = None
    outcomes: list[NotificationOutcome] = field(default_factory=list)
    heartbeat_sent: bool | None = None  # None when no heartbeat URL is configured

    @property
    def alerted(self) -> bool:
        return self.report is not None
