"""
log_entry.py

One row of the ``logs`` table.

Timestamps are stored and held in UTC; ``as_dict``/``str`` add the local
rendering for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

import core.helpers.date_time_helper as dt


@dataclass(frozen=True)
class LogEntry:
    id: Optional[int]
    timestamp: datetime
    log_level: str
    feature: str
    event: str
    reference_id: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LogEntry":
        ts = data["timestamp"]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return cls(
            id=data.get("id"),
            timestamp=ts,
            log_level=data.get("log_level") or "INFO",
            feature=data.get("feature") or "",
            event=data.get("event") or "",
            reference_id=data.get("reference_id"),
            message=data.get("message"),
        )

    @property
    def local_time(self) -> str:
        return dt.utc_to_local_str(self.timestamp.replace(microsecond=0).isoformat())

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp_utc": self.timestamp.replace(microsecond=0).isoformat(),
            "timestamp": self.local_time,
            "log_level": self.log_level,
            "feature": self.feature,
            "event": self.event,
            "reference_id": self.reference_id,
            "message": self.message,
        }

    def __str__(self) -> str:
        text = f"{self.local_time} [{self.log_level}] {self.feature}.{self.event}"
        if self.reference_id:
            text += f" ({self.reference_id})"
        if self.message:
            text += f": {self.message}"
        return text
