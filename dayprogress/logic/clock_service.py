"""
ClockService – text shown by the widget on each tick.
Separated from the view to keep responsibilities clean.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.helpers.date_time_helper import local_now

from ..models.day_window import MINUTES_PER_DAY, DayWindow
from ..models.widget_settings import WidgetSettings
from .schedule_resolver import ActiveSchedule, progress_for, resolve_active_schedule

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

TICK_OFFSET_MS = 5


def parse_time_to_minutes(value: str) -> Optional[int]:
    """"HH:MM" (00:00..23:59) to minutes since midnight; None if malformed."""
    match = _TIME_RE.match(value or "")
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(value: int) -> str:
    normalized = value % MINUTES_PER_DAY
    return f"{normalized // 60:02d}:{normalized % 60:02d}"


@dataclass(frozen=True)
class DayProgress:
    """Everything one render needs, computed from a single instant."""
    now: datetime
    schedule: ActiveSchedule
    percent: float


class ClockService:
    """Formats time, window and progress for the widget."""

    def __init__(self, tz_name: str = "") -> None:
        self._tz_name = tz_name

    def now(self) -> datetime:
        return local_now(self._tz_name)

    @staticmethod
    def _time_format(use_24h: bool, show_seconds: bool) -> str:
        if use_24h:
            return "%H:%M:%S" if show_seconds else "%H:%M"
        return "%I:%M:%S %p" if show_seconds else "%I:%M %p"

    def format_time(self, now: datetime, settings: WidgetSettings) -> str:
        text = now.strftime(self._time_format(settings.use_24h, settings.show_seconds))
        if not settings.use_24h and text.startswith("0"):
            # 12h clock shows "9:05 AM", not "09:05 AM"
            text = text[1:]
        return text

    @staticmethod
    def format_percent(percent: float) -> str:
        return f"{int(math.floor(percent + 0.5))}%"

    @staticmethod
    def format_window(window: DayWindow) -> str:
        return f"{minutes_to_time(window.start_minutes)} - {minutes_to_time(window.end_minutes)}"

    @staticmethod
    def day_progress(now: datetime, settings: WidgetSettings) -> DayProgress:
        schedule = resolve_active_schedule(now, settings)
        return DayProgress(now=now, schedule=schedule, percent=progress_for(now, schedule.bounds))

    @staticmethod
    def next_tick_delay_ms(now: datetime, offset_ms: int = TICK_OFFSET_MS) -> int:
        """Delay until just after the next wall-clock second boundary."""
        return 1000 - (now.microsecond // 1000) + offset_ms
