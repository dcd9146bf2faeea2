"""
date_time_helper.py

Provides helper functions for conversion and formatting of date and time values.
UTC is used for logging and storage; display and schedule evaluation use the
configured timezone ([General] timezone) or, when empty, the system local zone.

All features and modules should use ONLY these helpers for "now".
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional

try:
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError  # Python 3.9+
except ImportError:
    raise ImportError("Python 3.9+ with zoneinfo is required for timezone support.")


def resolve_timezone(name: str) -> Optional[tzinfo]:
    """
    Returns the ZoneInfo for an IANA name, or None for "" / unknown names.
    None means "system local time" to the callers below.
    """
    name = (name or "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def local_now(tz_name: str = "") -> datetime:
    """
    Current wall-clock time.

    With a valid timezone name the result is aware; otherwise it is the naive
    system local time, which is what the schedule resolver expects by default.
    """
    tz = resolve_timezone(tz_name)
    if tz is None:
        return datetime.now()
    return datetime.now(tz)


def utc_to_local_str(utc_iso: str) -> str:
    """
    Formats a UTC ISO8601 timestamp as a localized, human-readable string for display.

    :param utc_iso: UTC time as ISO string (from DB/logs)
    :return: String in format "YYYY-MM-DD HH:MM:SS" (local time)
    """
    dt_utc = datetime.fromisoformat(utc_iso)
    if dt_utc.tzinfo is None:
        dt_utc = dt_utc.replace(tzinfo=timezone.utc)
    return dt_utc.astimezone().strftime("%Y-%m-%d %H:%M:%S")
