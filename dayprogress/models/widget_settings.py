"""
Data model for Day Progress settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple

from .day_window import DayOverride, DayWindow

DAYS_PER_WEEK = 7
# 0 = Sunday .. 6 = Saturday; persisted override arrays are positional.
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class ThemeId(str, Enum):
    MIDNIGHT = "midnight"
    DARK_PURPLE = "dark-purple"
    FOREST = "forest"
    ROSE = "rose"
    AMBER = "amber"
    SLATE = "slate"

    @classmethod
    def parse(cls, value: object) -> "ThemeId":
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        return DEFAULT_THEME


class TimeFormat(str, Enum):
    H12 = "12h"
    H24 = "24h"


DEFAULT_THEME = ThemeId.MIDNIGHT
DEFAULT_WEEKDAY = DayWindow(9 * 60, 18 * 60)
DEFAULT_WEEKEND = DayWindow(10 * 60, 17 * 60 + 30)


def is_weekend_day(day: int) -> bool:
    return day == 0 or day == 6


def default_overrides(weekday: DayWindow = DEFAULT_WEEKDAY,
                      weekend: DayWindow = DEFAULT_WEEKEND) -> Tuple[DayOverride, ...]:
    """Seven disabled overrides, each carrying its day's default window."""
    return tuple(
        DayOverride(enabled=False, window=weekend if is_weekend_day(day) else weekday)
        for day in range(DAYS_PER_WEEK)
    )


@dataclass(frozen=True)
class WidgetSettings:
    """
    Encapsulates all user-configurable options for the widget.

    Attributes:
        theme (ThemeId): Colour theme label.
        time_format (TimeFormat): 12-hour or 24-hour clock.
        show_seconds (bool): Whether to render seconds.
        show_percent (bool): Whether to render the progress percentage.
        run_on_startup (bool): Register the widget to start with the session.
        weekday (DayWindow): Window for Monday to Friday.
        weekend (DayWindow): Window for Saturday and Sunday.
        overrides (tuple[DayOverride, ...]): Exactly seven entries, index 0 = Sunday.
    """
    theme: ThemeId = DEFAULT_THEME
    time_format: TimeFormat = TimeFormat.H12
    show_seconds: bool = False
    show_percent: bool = True
    run_on_startup: bool = False
    weekday: DayWindow = DEFAULT_WEEKDAY
    weekend: DayWindow = DEFAULT_WEEKEND
    overrides: Tuple[DayOverride, ...] = field(default_factory=default_overrides)

    def __post_init__(self) -> None:
        if len(self.overrides) != DAYS_PER_WEEK:
            raise ValueError(f"expected {DAYS_PER_WEEK} overrides, got {len(self.overrides)}")
        # lists are accepted for convenience; the stored value is always a tuple
        object.__setattr__(self, "overrides", tuple(self.overrides))

    @property
    def use_24h(self) -> bool:
        return self.time_format is TimeFormat.H24

    def with_changes(self, **changes) -> "WidgetSettings":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "theme": self.theme.value,
            "timeFormat": self.time_format.value,
            "showSeconds": self.show_seconds,
            "showPercent": self.show_percent,
            "runOnStartup": self.run_on_startup,
            "weekday": self.weekday.to_dict(),
            "weekend": self.weekend.to_dict(),
            "overrides": [o.to_dict() for o in self.overrides],
        }


DEFAULT_SETTINGS = WidgetSettings()
