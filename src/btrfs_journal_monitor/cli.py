"""Command-line entrypoint.

Example cron (check the last 1h30m every five minutes):
    */5 * * * * btrfs-journal-monitor --mode=production --email=you@example.com --lookback=1h30m
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
import socket
import sys
from collections.abc import Sequence

import httpx
from pydantic import ValidationError

from btrfs_journal_monitor.core.config import DEFAULT_LOG_PATH, RunConfig, resolve_timeout
from btrfs_journal_monitor.core.log_service import select_log_source
from btrfs_journal_monitor.core.models import Mode, RunResult
from btrfs_journal_monitor.core.notify import MailCommandMailer
from btrfs_journal_monitor.core.time_window import parse_lookback
from btrfs_journal_monitor.logging_setup import configure_logging, shutdown_logging
from btrfs_journal_monitor.monitor import run_monitor

logger = logging.getLogger(__name__)

_MODES = tuple(m.value for m in Mode)

_NOTES = """\
Notes:
  - lookback accepts NhNm (e.g. 2h, 45m, 1h30m); 0h0m is rejected
  - production reads journalctl -k --since "<window>"
  - development reads ./journalctl_output.txt (time window ignored)
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="btrfs-journal-monitor",
        description="BTRFS kernel alert check (journalctl) with lookback window + email/webhook.",
        epilog=_NOTES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    p.add_argument("--mode", default=None, metavar="|".join(_MODES), help="Log source (required)")
    p.add_argument("--email", default=None, metavar="EMAIL", help="Alert recipient (required)")
    p.add_argument("--lookback", default=None, metavar="NhNm", help="Time window (required)")
    p.add_argument("--debug", action="store_true", help="Write debug lines to the log file")
    p.add_argument(
        "--log",
        dest="log_path",
        default=str(DEFAULT_LOG_PATH),
        metavar="PATH",
        help=f"Diagnostic log file (default: {DEFAULT_LOG_PATH})",
    )
    p.add_argument("--heartbeat-url", default=None, metavar="URL", help="GET this URL at the end of every run")
    p.add_argument("--notification-url", default=None, metavar="URL", help="POST alerts to this URL")
    return p


def _validation_message(exc: ValidationError) -> str:
    err = exc.errors()[0]
    msg = str(err.get("msg", exc))
    return msg.removeprefix("Value error, ")


def build_config(parser: argparse.ArgumentParser, argv: Sequence[str]) -> RunConfig:
    """Parse and validate ``argv``. Exits with status 2 on any problem."""
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        parser.error(f"Unknown argument: {unknown[0]}")

    if not args.email:
        parser.error("--email is required")
    if not args.mode:
        parser.error("--mode is required")
    if not args.lookback:
        parser.error("--lookback is required (e.g. --lookback=1h30m)")
    if args.mode not in _MODES:
        parser.error(f"--mode must be production or development (got: {args.mode})")

    try:
        window = parse_lookback(args.lookback)
        timeout = resolve_timeout()
        return RunConfig(
            mode=Mode(args.mode),
            email=args.email,
            lookback_hours=window.hours,
            lookback_minutes=window.minutes,
            log_path=args.log_path,
            heartbeat_url=args.heartbeat_url,
            notification_url=args.notification_url,
            debug=args.debug,
            timeout=timeout,
        )
    except ValidationError as e:
        parser.error(_validation_message(e))
    except ValueError as e:
        parser.error(str(e))


async def _run(config: RunConfig, *, invocation: str) -> RunResult:
    async with httpx.AsyncClient(timeout=config.timeout) as client:
        return await run_monitor(
            config,
            source=select_log_source(config),
            mailer=MailCommandMailer(timeout=config.timeout),
            client=client,
            hostname=socket.gethostname(),
            invocation=invocation,
        )


def main(argv: Sequence[str] | None = None) -> None:
    """Run one check. Exit status: 0 done (alert or not), 2 usage error."""
    args = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    config = build_config(parser, args)

    try:
        configure_logging(config.log_path, debug=config.debug)
    except OSError as e:
        parser.error(f"cannot open log file {config.log_path}: {e}")

    prog = sys.argv[0] if sys.argv and sys.argv[0] else parser.prog
    try:
        asyncio.run(_run(config, invocation=shlex.join([prog, *args])))
    except Exception:
        logger.exception("BTRFS journal check aborted")
        raise SystemExit(1)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
