"""Alert delivery channels."""

from __future__ import annotations

from .mail import MailCommandMailer, Mailer, send_email_alert
from .service import notify_all, notify_email, notify_webhook
from .webhook import post_webhook, webhook_headers

__all__ = [
    "MailCommandMailer",
    "Mailer",
    "notify_all",
    "notify_email",
    "notify_webhook",
    "post_webhook",
    "send_email_alert",
    "webhook_headers",
]
