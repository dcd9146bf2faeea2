"""
Schedule resolver – which window applies "now" and how far through it we are.

All functions are pure. ``now`` may be naive (system local wall time) or
aware; bounds are anchored in the same zone as ``now``. Elapsed time and
containment are computed on absolute timestamps, so a DST change inside a
window shortens or stretches it instead of skewing the percentage.

Weekday indices follow the persisted convention 0 = Sunday .. 6 = Saturday.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

from ..models.day_window import DayWindow
from ..models.widget_settings import WidgetSettings, is_weekend_day


@dataclass(frozen=True)
class WindowBounds:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        """Inclusive at both ends."""
        ts = moment.timestamp()
        return self.start.timestamp() <= ts <= self.end.timestamp()

    @property
    def duration_ms(self) -> float:
        return (self.end.timestamp() - self.start.timestamp()) * 1000.0


@dataclass(frozen=True)
class ActiveSchedule:
    window: DayWindow
    bounds: WindowBounds
    anchor: date


def day_index(day: date) -> int:
    """Sunday-first weekday index of ``day``."""
    return day.isoweekday() % 7


def resolve_window_for_day(day: int, settings: WidgetSettings) -> DayWindow:
    override = settings.overrides[day]
    if override.enabled:
        return override.window
    return settings.weekend if is_weekend_day(day) else settings.weekday


def _at_minute(day: date, minutes: int, tz: Optional[tzinfo]) -> datetime:
    midnight = datetime.combine(day, time.min, tzinfo=tz)
    return midnight + timedelta(minutes=minutes)


def window_bounds(day: date, window: DayWindow, tz: Optional[tzinfo] = None) -> WindowBounds:
    """
    Concrete start/end of ``window`` on the calendar date ``day``.

    A window whose end is not after its start ends on the following day.
    """
    if isinstance(day, datetime):
        tz = day.tzinfo if tz is None else tz
        day = day.date()
    start = _at_minute(day, window.start_minutes, tz)
    end_day = day + timedelta(days=1) if window.crosses_midnight else day
    end = _at_minute(end_day, window.end_minutes, tz)
    return WindowBounds(start, end)


def resolve_active_schedule(now: datetime, settings: WidgetSettings) -> ActiveSchedule:
    """
    Today's window if it contains ``now``; otherwise yesterday's window when
    it crossed midnight and is still running; otherwise today's window.
    """
    tz = now.tzinfo
    today = now.date()

    today_window = resolve_window_for_day(day_index(today), settings)
    today_bounds = window_bounds(today, today_window, tz)
    if today_bounds.contains(now):
        return ActiveSchedule(today_window, today_bounds, today)

    yesterday = today - timedelta(days=1)
    yesterday_window = resolve_window_for_day(day_index(yesterday), settings)
    yesterday_bounds = window_bounds(yesterday, yesterday_window, tz)
    if yesterday_bounds.contains(now):
        return ActiveSchedule(yesterday_window, yesterday_bounds, yesterday)

    return ActiveSchedule(today_window, today_bounds, today)


def progress_for(now: datetime, bounds: WindowBounds) -> float:
    """Elapsed share of ``bounds`` at ``now`` in percent, clamped to [0, 100]."""
    duration_ms = bounds.duration_ms
    if duration_ms <= 0:
        return 0.0
    elapsed_ms = (now.timestamp() - bounds.start.timestamp()) * 1000.0
    raw = elapsed_ms / duration_ms * 100.0
    return min(100.0, max(0.0, raw))


def progress_percent(now: datetime, settings: WidgetSettings) -> float:
    return progress_for(now, resolve_active_schedule(now, settings).bounds)
