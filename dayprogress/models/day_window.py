"""
Time-of-day windows for the Day Progress schedule.
"""

from __future__ import annotations

from dataclasses import dataclass

MINUTES_PER_DAY = 1440


def is_valid_minutes(value: object) -> bool:
    """True for an int (not bool) in [0, 1440)."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < MINUTES_PER_DAY


@dataclass(frozen=True)
class DayWindow:
    """
    A start/end pair in minutes since local midnight.

    Attributes:
        start_minutes (int): Start of the window, 0..1439.
        end_minutes (int): End of the window, 0..1439. When it is not after
            ``start_minutes`` the window ends on the following day.

    Raises:
        ValueError: If a bound is out of range or both bounds are equal.
    """
    start_minutes: int
    end_minutes: int

    def __post_init__(self) -> None:
        if not (is_valid_minutes(self.start_minutes) and is_valid_minutes(self.end_minutes)):
            raise ValueError(
                f"window bounds must be whole minutes in [0, {MINUTES_PER_DAY}): "
                f"{self.start_minutes!r}, {self.end_minutes!r}"
            )
        if self.start_minutes == self.end_minutes:
            raise ValueError("window start and end cannot be the same")

    @property
    def crosses_midnight(self) -> bool:
        return self.end_minutes <= self.start_minutes

    def to_dict(self) -> dict:
        return {"startMinutes": self.start_minutes, "endMinutes": self.end_minutes}


@dataclass(frozen=True)
class DayOverride:
    """A per-weekday replacement window, used only when ``enabled``."""
    enabled: bool
    window: DayWindow

    @property
    def start_minutes(self) -> int:
        return self.window.start_minutes

    @property
    def end_minutes(self) -> int:
        return self.window.end_minutes

    def to_dict(self) -> dict:
        return {"enabled": self.enabled, **self.window.to_dict()}
