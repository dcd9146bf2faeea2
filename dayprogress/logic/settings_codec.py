"""
Settings codec – JSON text <-> WidgetSettings.

Two persisted shapes are understood:

- current schema : the full WidgetSettings object (camelCase keys)
- legacy schema  : ``{"startMinutes": int, "endMinutes": int}``, a single
                   window applied to every day

Parsing never rejects a current-schema document field by field: every
missing, mistyped or out-of-range field is replaced by its default. A parser
returns None only when the document as a whole is not usable (not an object,
or a legacy window that is not valid).
"""

from __future__ import annotations

import json
import math
from typing import Any, List, Optional

from ..models.day_window import DayOverride, DayWindow, is_valid_minutes
from ..models.widget_settings import (
    DAYS_PER_WEEK,
    DEFAULT_SETTINGS,
    DEFAULT_WEEKDAY,
    DEFAULT_WEEKEND,
    ThemeId,
    TimeFormat,
    WidgetSettings,
    is_weekend_day,
)


# --- Field coercion -------------------------------------------------------

def coerce_minutes(value: Any) -> Optional[int]:
    """
    Returns ``value`` as whole minutes, or None.

    Accepted: ints, integral finite floats and numeric strings. Booleans and
    None are rejected even though they are "numbers" in some JSON producers.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if is_valid_minutes(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not isinstance(value, float) or not math.isfinite(value) or not value.is_integer():
        return None
    minutes = int(value)
    return minutes if is_valid_minutes(minutes) else None


def normalize_window(candidate: Any, fallback: DayWindow) -> DayWindow:
    """The window described by ``candidate`` if fully valid, else ``fallback``."""
    if not isinstance(candidate, dict):
        return fallback
    start = coerce_minutes(candidate.get("startMinutes"))
    end = coerce_minutes(candidate.get("endMinutes"))
    if start is None or end is None or start == end:
        return fallback
    return DayWindow(start, end)


def normalize_override(candidate: Any, fallback: DayWindow) -> DayOverride:
    if not isinstance(candidate, dict):
        return DayOverride(enabled=False, window=fallback)
    return DayOverride(
        enabled=candidate.get("enabled") is True,
        window=normalize_window(candidate, fallback),
    )


def parse_time_format(value: Any) -> TimeFormat:
    return TimeFormat.H24 if value == TimeFormat.H24.value else TimeFormat.H12


# --- Schema parsers -------------------------------------------------------

def parse_current(value: Any) -> Optional[WidgetSettings]:
    """
    Parses a decoded current-schema document.

    Overrides fall back to this document's own weekday/weekend windows, so a
    damaged override row inherits the user's schedule rather than the factory
    default.
    """
    if not isinstance(value, dict):
        return None

    weekday = normalize_window(value.get("weekday"), DEFAULT_WEEKDAY)
    weekend = normalize_window(value.get("weekend"), DEFAULT_WEEKEND)
    raw_overrides: List[Any] = value.get("overrides") if isinstance(value.get("overrides"), list) else []

    overrides = []
    for day in range(DAYS_PER_WEEK):
        candidate = raw_overrides[day] if day < len(raw_overrides) else None
        fallback = weekend if is_weekend_day(day) else weekday
        overrides.append(normalize_override(candidate, fallback))

    return WidgetSettings(
        theme=ThemeId.parse(value.get("theme")),
        time_format=parse_time_format(value.get("timeFormat")),
        show_seconds=value.get("showSeconds") is True,
        show_percent=value.get("showPercent") is not False,
        run_on_startup=value.get("runOnStartup") is True,
        weekday=weekday,
        weekend=weekend,
        overrides=tuple(overrides),
    )


def parse_legacy(value: Any) -> Optional[WidgetSettings]:
    """Migrates a decoded legacy document; None unless its window is valid."""
    if not isinstance(value, dict):
        return None
    start = coerce_minutes(value.get("startMinutes"))
    end = coerce_minutes(value.get("endMinutes"))
    if start is None or end is None or start == end:
        return None

    window = DayWindow(start, end)
    return DEFAULT_SETTINGS.with_changes(
        weekday=window,
        weekend=window,
        overrides=tuple(DayOverride(enabled=False, window=window) for _ in range(DAYS_PER_WEEK)),
    )


# --- Text level -----------------------------------------------------------

def decode(text: Optional[str]) -> Any:
    """
    Decodes JSON text; raises ValueError for absent/empty or malformed input.
    """
    if not text:
        raise ValueError("no stored value")
    return json.loads(text)


def encode(settings: WidgetSettings) -> str:
    return json.dumps(settings.to_dict(), separators=(",", ":"))
