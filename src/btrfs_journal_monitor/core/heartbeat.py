"""Liveness ping sent at the end of every run."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


async def ping_heartbeat(client: httpx.AsyncClient, url: str | None) -> bool | None:
    """GET ``url``. Returns None when unset, else whether the ping succeeded."""
    if not url:
        return None
    try:
        resp = await client.get(url)
        resp.raise_for_status()
    except Exception as e:
        logger.error("heartbeat-url failed: %s", e)
        return False
    logger.debug("Heartbeat sent to %s", url)
    return True
