"""Lookback window helpers.

Turns a ``NhNm`` selector into a :class:`LookbackWindow` and renders it as a
``journalctl --since`` expression.
"""

from __future__ import annotations

import re

from .models import LookbackWindow

_LOOKBACK_RE = re.compile(r"^(?:(?P<h>\d+)h)?(?:(?P<m>\d+)m)?$")


def parse_lookback(s: str) -> LookbackWindow:
    """Parse ``2h``, ``45m`` or ``1h30m`` into a window. Rejects ``0h0m``."""
    m = _LOOKBACK_RE.match(s)
    if not s or not m:
        raise ValueError("--lookback must be in format NhNm (e.g. 2h, 45m, 1h30m)")
    hours = int(m.group("h") or 0)
    minutes = int(m.group("m") or 0)
    if hours == 0 and minutes == 0:
        raise ValueError("--lookback cannot be 0h0m")
    return LookbackWindow(hours=hours, minutes=minutes)


def build_since_arg(window: LookbackWindow) -> str:
    """Return the ``--since`` expression for journalctl.

    Assumes at least one component is positive.
    """
    if window.hours > 0 and window.minutes > 0:
        return f"{window.hours} hour ago {window.minutes} min ago"
    if window.hours > 0:
        return f"{window.hours} hour ago"
    return f"{window.minutes} min ago"


def describe_window(window: LookbackWindow) -> str:
    """Human-readable window used in alert text."""
    return f"{window.hours} hour(s) + {window.minutes} minute(s)"
