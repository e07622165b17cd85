"""Module entrypoint.

Allows:
    python -m btrfs_journal_monitor --mode=... --email=... --lookback=...
"""

from __future__ import annotations

from btrfs_journal_monitor.cli import main

if __name__ == "__main__":
    main()
