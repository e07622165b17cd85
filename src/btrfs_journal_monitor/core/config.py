"""Run configuration.

A :class:`RunConfig` is built once per invocation and passed explicitly to
every stage; downstream code trusts its invariants.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import LookbackWindow, Mode

DEFAULT_LOG_PATH = Path("/var/log/btrfs_journal_monitor.log")
DEFAULT_TIMEOUT_S = 10.0
TIMEOUT_ENV = "BTRFS_MONITOR_TIMEOUT"


class RunConfig(BaseModel):
    """Validated, immutable settings for a single check."""

    model_config = ConfigDict(frozen=True)

    mode: Mode
    email: str
    lookback_hours: int = Field(default=0, ge=0)
    lookback_minutes: int = Field(default=0, ge=0)
    log_path: Path = DEFAULT_LOG_PATH
    heartbeat_url: str | None = None
    notification_url: str | None = None
    debug: bool = False
    timeout: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("--email is required")
        return v

    @field_validator("heartbeat_url", "notification_url")
    @classmethod
    def blank_url_is_unset(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def lookback_not_empty(self) -> RunConfig:
        if self.lookback_hours == 0 and self.lookback_minutes == 0:
            raise ValueError("--lookback cannot be 0h0m")
        return self

    @property
    def window(self) -> LookbackWindow:
        return LookbackWindow(hours=self.lookback_hours, minutes=self.lookback_minutes)


def resolve_timeout(default: float = DEFAULT_TIMEOUT_S) -> float:
    """Return the transport timeout, honouring ``BTRFS_MONITOR_TIMEOUT``."""
    env = os.getenv(TIMEOUT_ENV)
    if env is None or env == "":
        return default

    try:
        value = float(env)
    except ValueError as exc:
        raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds") from exc
    if value <= 0:
        raise ValueError(f"{TIMEOUT_ENV} must be > 0")
    return value
