"""Email channel backed by the local ``mail`` command."""

from __future__ import annotations

import asyncio
import logging
import shutil
from typing import Protocol

from ..config import DEFAULT_TIMEOUT_S
from ..errors import DependencyMissingError

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    """Mail transport interface."""

    async def send(self, subject: str, recipient: str, body: str) -> None:
        """Deliver ``body``; raise on failure."""
        ...


class MailCommandMailer:
    """Pipe the body into ``mail -s <subject> <recipient>``."""

    def __init__(self, command: str = "mail", *, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self.command = command
        self.timeout = timeout

    async def send(self, subject: str, recipient: str, body: str) -> None:
        exe = shutil.which(self.command)
        if exe is None:
            raise DependencyMissingError(self.command)

        proc = await asyncio.create_subprocess_exec(
            exe,
            "-s",
            subject,
            recipient,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            _, err = await asyncio.wait_for(
                proc.communicate(body.encode("utf-8")), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise RuntimeError(f"{self.command} timed out after {self.timeout:g}s") from None

        if proc.returncode != 0:
            detail = err.decode("utf-8", errors="replace").strip()
            raise RuntimeError(
                f"{self.command} exited with status {proc.returncode}"
                + (f": {detail}" if detail else "")
            )


async def send_email_alert(mailer: Mailer, *, recipient: str, subject: str, body: str) -> None:
    """Send one alert email and log the delivery."""
    await mailer.send(subject, recipient, body)
    logger.info(
        "Successfully sent email to `%s` with subject `%s` using %s.",
        recipient,
        subject,
        type(mailer).__name__,
    )
