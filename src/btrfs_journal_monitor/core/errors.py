"""Exceptions shared by log sources and notification channels."""

from __future__ import annotations


class DependencyMissingError(RuntimeError):
    """An external command the check relies on is not installed."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Command '{command}' not found; skipping related checks.")
        self.command = command
