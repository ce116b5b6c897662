"""
Clock - Source of "now" for admission and projections
"""
from datetime import datetime, timezone
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in the configured application timezone"""

    def __init__(self, tz_name: str) -> None:
        self.tz = ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(self.tz)


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive values are stored UTC (SQLite drops the offset), so they are tagged
    rather than converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def minutes_since_midnight(value: datetime) -> int:
    return value.hour * 60 + value.minute


def parse_clock_time(value: str) -> int:
    """Convert 'HH:MM' into minutes since midnight"""
    hour, minute = value.split(":")
    return int(hour) * 60 + int(minute)
