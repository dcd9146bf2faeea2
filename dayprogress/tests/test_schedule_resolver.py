"""
dayprogress/tests/test_schedule_resolver.py

Unit tests for window lookup, bounds anchoring and progress computation.
Instants are UTC-aware so results do not depend on the machine's zone.
"""

from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta, timezone

from dayprogress.logic.schedule_resolver import (
    day_index,
    progress_for,
    progress_percent,
    resolve_active_schedule,
    resolve_window_for_day,
    window_bounds,
)
from dayprogress.models.day_window import DayOverride, DayWindow
from dayprogress.models.widget_settings import DEFAULT_SETTINGS, default_overrides

UTC = timezone.utc
WEDNESDAY = date(2024, 1, 10)
SUNDAY = date(2024, 1, 14)
MONDAY = date(2024, 1, 15)


def at(day: date, hour: int, minute: int = 0, second: int = 0, micro: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, micro, tzinfo=UTC)


def with_override(day: int, window: DayWindow, enabled: bool = True):
    overrides = list(default_overrides())
    overrides[day] = DayOverride(enabled=enabled, window=window)
    return DEFAULT_SETTINGS.with_changes(overrides=tuple(overrides))


class TestDayIndex(unittest.TestCase):
    def test_sunday_is_zero(self) -> None:
        self.assertEqual(day_index(SUNDAY), 0)
        self.assertEqual(day_index(MONDAY), 1)
        self.assertEqual(day_index(date(2024, 1, 13)), 6)


class TestResolveWindowForDay(unittest.TestCase):
    def test_defaults_by_day_type(self) -> None:
        s = DEFAULT_SETTINGS
        self.assertEqual(resolve_window_for_day(0, s), s.weekend)
        self.assertEqual(resolve_window_for_day(6, s), s.weekend)
        for day in range(1, 6):
            self.assertEqual(resolve_window_for_day(day, s), s.weekday)

    def test_enabled_override_wins(self) -> None:
        custom = DayWindow(7 * 60, 12 * 60)
        s = with_override(3, custom)
        self.assertEqual(resolve_window_for_day(3, s), custom)
        self.assertEqual(resolve_window_for_day(2, s), s.weekday)

    def test_disabled_override_is_ignored(self) -> None:
        s = with_override(0, DayWindow(60, 120), enabled=False)
        self.assertEqual(resolve_window_for_day(0, s), s.weekend)


class TestDayWindow(unittest.TestCase):
    def test_crosses_midnight(self) -> None:
        self.assertFalse(DayWindow(540, 1080).crosses_midnight)
        self.assertTrue(DayWindow(1380, 60).crosses_midnight)
        self.assertTrue(DayWindow(600, 599).crosses_midnight)

    def test_rejects_bad_bounds(self) -> None:
        for a, b in ((600, 600), (-1, 10), (0, 1440), (True, 10), (1.0, 10)):
            with self.subTest(a=a, b=b), self.assertRaises(ValueError):
                DayWindow(a, b)

    def test_span_comes_from_anchored_bounds(self) -> None:
        window = DayWindow(1380, 60)
        self.assertEqual(
            sorted(name for name in dir(window) if not name.startswith("_")),
            ["crosses_midnight", "end_minutes", "start_minutes", "to_dict"],
        )
        bounds = window_bounds(WEDNESDAY, window, UTC)
        self.assertEqual(bounds.end - bounds.start, timedelta(hours=2))


class TestWindowBounds(unittest.TestCase):
    def test_same_day_and_crossing_windows(self) -> None:
        pairs = [(0, 1), (480, 1020), (1439, 0), (1380, 60), (600, 599), (1, 1439)]
        for a, b in pairs:
            with self.subTest(a=a, b=b):
                bounds = window_bounds(WEDNESDAY, DayWindow(a, b), UTC)
                midnight = at(WEDNESDAY, 0)
                self.assertEqual(bounds.start, midnight + timedelta(minutes=a))
                end_day = midnight if b > a else midnight + timedelta(days=1)
                self.assertEqual(bounds.end, end_day + timedelta(minutes=b))

    def test_datetime_anchor_uses_its_date_and_zone(self) -> None:
        bounds = window_bounds(at(WEDNESDAY, 15, 30), DayWindow(540, 1080))
        self.assertEqual(bounds.start, at(WEDNESDAY, 9))
        self.assertEqual(bounds.end, at(WEDNESDAY, 18))

    def test_contains_is_inclusive(self) -> None:
        bounds = window_bounds(WEDNESDAY, DayWindow(540, 1080), UTC)
        self.assertTrue(bounds.contains(at(WEDNESDAY, 9)))
        self.assertTrue(bounds.contains(at(WEDNESDAY, 18)))
        self.assertFalse(bounds.contains(at(WEDNESDAY, 18, 0, 0, 1000)))


class TestResolveActiveSchedule(unittest.TestCase):
    def test_today_window_when_inside(self) -> None:
        active = resolve_active_schedule(at(WEDNESDAY, 12), DEFAULT_SETTINGS)
        self.assertEqual(active.window, DEFAULT_SETTINGS.weekday)
        self.assertEqual(active.anchor, WEDNESDAY)

    def test_midnight_crossing_uses_yesterday_anchor(self) -> None:
        night = DayWindow(1380, 60)
        s = DEFAULT_SETTINGS.with_changes(weekday=night, weekend=night)
        now = at(WEDNESDAY, 0, 30)

        active = resolve_active_schedule(now, s)

        self.assertEqual(active.anchor, WEDNESDAY - timedelta(days=1))
        self.assertEqual(active.bounds.start, at(WEDNESDAY - timedelta(days=1), 23))
        self.assertEqual(active.bounds.end, at(WEDNESDAY, 1))
        self.assertAlmostEqual(progress_percent(now, s), 75.0, places=6)

    def test_yesterday_rule_is_used_across_weekend_boundary(self) -> None:
        s = DEFAULT_SETTINGS.with_changes(weekend=DayWindow(22 * 60, 2 * 60))
        active = resolve_active_schedule(at(MONDAY, 1), s)
        self.assertEqual(active.window, s.weekend)
        self.assertEqual(active.anchor, SUNDAY)

    def test_falls_back_to_today_outside_every_window(self) -> None:
        active = resolve_active_schedule(at(WEDNESDAY, 20), DEFAULT_SETTINGS)
        self.assertEqual(active.window, DEFAULT_SETTINGS.weekday)
        self.assertEqual(active.anchor, WEDNESDAY)
        self.assertEqual(progress_percent(at(WEDNESDAY, 20), DEFAULT_SETTINGS), 100.0)


class TestProgress(unittest.TestCase):
    def test_start_and_end_boundaries(self) -> None:
        s = DEFAULT_SETTINGS  # weekday 09:00-18:00
        self.assertEqual(progress_percent(at(WEDNESDAY, 9), s), 0.0)
        self.assertEqual(progress_percent(at(WEDNESDAY, 18), s), 100.0)

    def test_one_millisecond_before_start(self) -> None:
        s = DEFAULT_SETTINGS
        now = at(WEDNESDAY, 9) - timedelta(milliseconds=1)
        active = resolve_active_schedule(now, s)
        self.assertEqual(active.anchor, WEDNESDAY)
        self.assertEqual(active.window, s.weekday)
        self.assertEqual(progress_percent(now, s), 0.0)

    def test_midpoint(self) -> None:
        self.assertAlmostEqual(progress_percent(at(WEDNESDAY, 13, 30), DEFAULT_SETTINGS), 50.0)

    def test_non_positive_duration_is_zero(self) -> None:
        bounds = window_bounds(WEDNESDAY, DayWindow(540, 1080), UTC)
        collapsed = type(bounds)(bounds.end, bounds.start)
        self.assertEqual(progress_for(at(WEDNESDAY, 12), collapsed), 0.0)

    def test_progress_is_always_clamped(self) -> None:
        s = DEFAULT_SETTINGS
        for hour in range(24):
            with self.subTest(hour=hour):
                p = progress_percent(at(WEDNESDAY, hour, 17), s)
                self.assertGreaterEqual(p, 0.0)
                self.assertLessEqual(p, 100.0)


class TestDaylightSaving(unittest.TestCase):
    def setUp(self) -> None:
        try:
            from zoneinfo import ZoneInfo
            self.tz = ZoneInfo("Europe/Berlin")
        except Exception:  # noqa: BLE001 - no tz database on this machine
            self.skipTest("Europe/Berlin not available")

    def test_spring_forward_window_is_measured_in_real_time(self) -> None:
        # 2024-03-31 02:00 -> 03:00 in Berlin: 01:00-05:00 lasts three real hours
        day = date(2024, 3, 31)
        s = DEFAULT_SETTINGS.with_changes(weekend=DayWindow(60, 300))
        now = datetime(2024, 3, 31, 4, 0, tzinfo=self.tz)
        bounds = resolve_active_schedule(now, s).bounds
        self.assertEqual(bounds.duration_ms, 3 * 3600 * 1000)
        self.assertEqual(bounds.start.date(), day)
        self.assertAlmostEqual(progress_percent(now, s), 200 / 3, places=6)


if __name__ == "__main__":
    unittest.main()
