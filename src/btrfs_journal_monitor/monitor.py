"""Single monitor run: fetch, filter, alert, heartbeat."""

from __future__ import annotations

import logging
from datetime import datetime

import httpx

from btrfs_journal_monitor.core.config import RunConfig
from btrfs_journal_monitor.core.filtering import filter_lines
from btrfs_journal_monitor.core.heartbeat import ping_heartbeat
from btrfs_journal_monitor.core.log_service import LogSource, fetch_raw_batch
from btrfs_journal_monitor.core.models import AlertReport, NotificationOutcome, RunResult
from btrfs_journal_monitor.core.notify import Mailer, notify_all, notify_webhook
from btrfs_journal_monitor.core.report import build_alert_report, webhook_title
from btrfs_journal_monitor.core.time_window import build_since_arg

logger = logging.getLogger(__name__)


def _log_config(config: RunConfig) -> None:
    logger.debug(
        "Config: MODE=%s EMAIL=%s DEBUG=%s LOG=%s",
        config.mode.value,
        config.email,
        int(config.debug),
        config.log_path,
    )
    logger.debug("Config: LOOKBACK=%sh%sm", config.lookback_hours, config.lookback_minutes)
    logger.debug("Config: NOTIFICATION_URL=%s", config.notification_url or "")
    logger.debug("Config: HEARTBEAT_URL=%s", config.heartbeat_url or "")


async def check_journal(
    config: RunConfig,
    *,
    source: LogSource,
    mailer: Mailer,
    client: httpx.AsyncClient,
    hostname: str,
    invocation: str,
    now: datetime | None = None,
) -> tuple[list[str], AlertReport | None, list[NotificationOutcome]]:
    """Run the check without the heartbeat."""
    logger.info("STARTING === BTRFS journal kernel check ===")
    logger.info("Invoked as: %s", invocation)
    _log_config(config)

    async def _surface(msg: str) -> None:
        await notify_webhook(client, config, title=webhook_title(hostname), text=msg)

    raw = await fetch_raw_batch(
        source,
        build_since_arg(config.window),
        on_dependency_missing=_surface,
    )
    logger.debug("Fetched %d raw line(s)", len(raw))

    lines = filter_lines(raw)
    if not lines:
        logger.info("No BTRFS kernel lines found (after exclusions) in lookback window.")
        return lines, None, []

    report = build_alert_report(
        lines,
        host=hostname,
        timestamp=now or datetime.now().astimezone(),
        window=config.window,
        invocation=invocation,
    )

    logger.error("BTRFS kernel lines detected; sending %s notification.", report.stage)
    outcomes = await notify_all(report, config, mailer=mailer, client=client)
    logger.error("%s notification dispatched.", report.stage)
    return lines, report, outcomes


async def run_monitor(
    config: RunConfig,
    *,
    source: LogSource,
    mailer: Mailer,
    client: httpx.AsyncClient,
    hostname: str,
    invocation: str,
    now: datetime | None = None,
) -> RunResult:
    """Run the check, then always ping the heartbeat (even if the check raised)."""
    lines: list[str] = []
    report: AlertReport | None = None
    outcomes: list[NotificationOutcome] = []
    try:
        lines, report, outcomes = await check_journal(
            config,
            source=source,
            mailer=mailer,
            client=client,
            hostname=hostname,
            invocation=invocation,
            now=now,
        )
    finally:
        heartbeat_sent = await ping_heartbeat(client, config.heartbeat_url)

    return RunResult(lines=lines, report=report, outcomes=outcomes, heartbeat_sent=heartbeat_sent)
