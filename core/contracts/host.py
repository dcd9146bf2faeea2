"""core/contracts/host.py
=====================

Contracts for the host platform the widget runs in.

Two collaborators are described here:
- the windowing shell (move/resize the current window, manage the secondary
  settings window, exchange named signals between windows)
- the "run at system startup" toggle

Every operation may fail. Implementations raise :class:`HostError` or
:class:`AutostartError`; callers report the failure and carry on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

MAIN_WINDOW_LABEL = "main"
SETTINGS_WINDOW_LABEL = "settings"

SETTINGS_REFRESH_EVENT = "settings-window:refresh"
WIDGET_RESTART_EVENT = "widget:restart"

SignalHandler = Callable[[], None]


class HostError(Exception):
    """A windowing-shell operation failed."""


class AutostartError(Exception):
    """Querying or changing the run-at-startup registration failed."""


class ResizeDirection(str, Enum):
    EAST = "East"
    NORTH = "North"
    NORTH_EAST = "NorthEast"
    NORTH_WEST = "NorthWest"
    SOUTH = "South"
    SOUTH_EAST = "SouthEast"
    SOUTH_WEST = "SouthWest"
    WEST = "West"

    @classmethod
    def parse(cls, value: str) -> "ResizeDirection | None":
        for member in cls:
            if member.value == value:
                return member
        return None


class IHostShell(ABC):
    """Window operations for the window this shell belongs to."""

    @property
    @abstractmethod
    def label(self) -> str:
        """Window label, ``MAIN_WINDOW_LABEL`` or ``SETTINGS_WINDOW_LABEL``."""

    @property
    def is_settings_window(self) -> bool:
        return self.label == SETTINGS_WINDOW_LABEL

    @abstractmethod
    def start_dragging(self) -> None:
        """Let the pointer move the current window until the button is released."""

    @abstractmethod
    def start_resize_dragging(self, direction: ResizeDirection) -> None:
        """Let the pointer resize the current window from the given edge."""

    @abstractmethod
    def open_secondary_window(self) -> None:
        """Create the settings window."""

    @abstractmethod
    def focus_secondary_window(self) -> bool:
        """Show and focus the settings window; False if it does not exist."""

    @abstractmethod
    def close_current_window(self) -> None:
        """Close the window this shell belongs to."""

    @abstractmethod
    def emit(self, event: str, target: str) -> None:
        """Send a named signal to the window labelled ``target`` (fire-and-forget)."""

    @abstractmethod
    def subscribe(self, event: str, handler: SignalHandler) -> None:
        """Run ``handler`` whenever this window receives ``event``."""


class IAutostart(ABC):
    """Run-at-system-startup registration."""

    @abstractmethod
    def is_enabled(self) -> bool:
        """True if the application is registered to start with the session."""

    @abstractmethod
    def enable(self) -> None:
        """Register the application."""

    @abstractmethod
    def disable(self) -> None:
        """Remove the registration; no-op if absent."""
