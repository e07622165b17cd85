"""Best-effort fan-out to every configured channel.

Each channel is attempted independently; a failure is logged and reported as
a :class:`NotificationOutcome`, never raised.
"""

from __future__ import annotations

import logging

import httpx

from ..config import RunConfig
from ..models import AlertReport, Channel, NotificationOutcome
from ..report import email_subject, webhook_title
from .mail import Mailer, send_email_alert
from .webhook import post_webhook

logger = logging.getLogger(__name__)


async def notify_webhook(
    client: httpx.AsyncClient,
    config: RunConfig,
    *,
    title: str,
    text: str,
) -> NotificationOutcome | None:
    """POST ``text`` to the notification URL. Returns None when none is set."""
    if not config.notification_url:
        return None
    try:
        await post_webhook(client, config.notification_url, title=title, text=text)
    except Exception as e:
        logger.error("notification-url POST failed: %s", e)
        return NotificationOutcome(channel=Channel.WEBHOOK, success=False, error_detail=str(e))
    return NotificationOutcome(channel=Channel.WEBHOOK, success=True)


async def notify_email(
    mailer: Mailer,
    config: RunConfig,
    *,
    subject: str,
    body: str,
) -> NotificationOutcome:
    try:
        await send_email_alert(mailer, recipient=config.email, subject=subject, body=body)
    except Exception as e:
        logger.error("Email to `%s` failed: %s", config.email, e)
        return NotificationOutcome(channel=Channel.EMAIL, success=False, error_detail=str(e))
    return NotificationOutcome(channel=Channel.EMAIL, success=True)


async def notify_all(
    report: AlertReport,
    config: RunConfig,
    *,
    mailer: Mailer,
    client: httpx.AsyncClient,
) -> list[NotificationOutcome]:
    """Deliver ``report`` through the webhook (if configured), then email."""
    outcomes: list[NotificationOutcome] = []

    hook = await notify_webhook(client, config, title=webhook_title(report.host), text=report.text)
    if hook is not None:
        outcomes.append(hook)

    outcomes.append(
        await notify_email(
            mailer,
            config,
            subject=email_subject(report.host, report.stage),
            body=report.text,
        )
    )
    return outcomes
