"""BTRFS line filter.

Plain pattern matching over raw journal text:
- keep lines with ``kernel: BTRFS`` that are not ``BTRFS info``
- then drop ``device ... scanned by mount (PID)`` noise
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_BTRFS_RE = re.compile(r"kernel:\s*BTRFS")
_BTRFS_INFO_RE = re.compile(r"kernel:\s*BTRFS\s+info")
_MOUNT_SCAN_RE = re.compile(r"kernel:\s*BTRFS:\s*device\s+.*\s+scanned by mount\s+\(\d+\)$")


def is_btrfs_alert(line: str) -> bool:
    """True for BTRFS kernel lines other than ``info`` severity."""
    return _BTRFS_RE.search(line) is not None and _BTRFS_INFO_RE.search(line) is None


def is_benign_noise(line: str) -> bool:
    """True for the device scan line emitted on every mount."""
    return _MOUNT_SCAN_RE.search(line) is not None


def filter_lines(lines: Iterable[str]) -> list[str]:
    """Return actionable lines, preserving source order."""
    kept = [line for line in lines if is_btrfs_alert(line)]
    return [line for line in kept if not is_benign_noise(line)]
