"""Webhook channel (ntfy-style headers)."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

PRIORITY = "urgent"
TAGS = "rotating_light,skull"


def webhook_headers(title: str) -> dict[str, str]:
    return {"Title": title, "Priority": PRIORITY, "Tags": TAGS}


async def post_webhook(client: httpx.AsyncClient, url: str, *, title: str, text: str) -> None:
    """POST the raw alert text; non-2xx responses raise ``httpx.HTTPStatusError``."""
    resp = await client.post(url, content=text.encode("utf-8"), headers=webhook_headers(title))
    resp.raise_for_status()
    logger.debug("Webhook POST to %s returned %s", url, resp.status_code)
