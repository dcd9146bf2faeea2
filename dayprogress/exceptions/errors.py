"""Day Progress feature exceptions."""
from __future__ import annotations


class DayProgressError(Exception):
    """Base exception for the Day Progress feature."""


class InvalidWindowInput(DayProgressError):
    """Raised when a time window typed into the settings form is rejected."""

    def __init__(self, label: str, reason: str) -> None:
        self.label = label
        self.reason = reason
        super().__init__(f"{label}: {reason}")


class SettingsPersistenceError(DayProgressError):
    """Raised when settings could not be written to the key-value store."""
