"""Alert text assembly."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .models import AlertReport, LookbackWindow
from .time_window import describe_window

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
STAGE_INSTANT = "INSTANT"


def email_subject(host: str, stage: str = STAGE_INSTANT) -> str:
    return f"{host}: BTRFS kernel alert ({stage} delivery)"


def webhook_title(host: str) -> str:
    return f"{host}: BTRFS kernel alert"


def render_alert_text(
    *,
    host: str,
    timestamp: datetime,
    window: LookbackWindow,
    invocation: str,
    lines: Sequence[str],
    stage: str = STAGE_INSTANT,
) -> str:
    """Render the body shared by every channel."""
    header = [
        f"BTRFS kernel alert on {host}",
        f"Time: {timestamp.strftime(TIMESTAMP_FORMAT)}",
        f"Stage: {stage}",
        f"Lookback: {describe_window(window)}",
        f"Invoked as: {invocation}",
        "",
        "Lines:",
        "",
    ]
    return "\n".join([*header, *lines]) + "\n"


def build_alert_report(
    lines: Sequence[str],
    *,
    host: str,
    timestamp: datetime,
    window: LookbackWindow,
    invocation: str,
    stage: str = STAGE_INSTANT,
) -> AlertReport:
    """Bundle filtered lines and run context into an :class:`AlertReport`.

    Callers only build a report for a non-empty batch.
    """
    if not lines:
        raise ValueError("cannot build an alert report without lines")
    return AlertReport(
        host=host,
        timestamp=timestamp,
        window=window,
        invocation=invocation,
        lines=tuple(lines),
        stage=stage,
        text=render_alert_text(
            host=host,
            timestamp=timestamp,
            window=window,
            invocation=invocation,
            lines=lines,
            stage=stage,
        ),
    )
