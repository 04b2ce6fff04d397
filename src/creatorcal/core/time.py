from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone

from .errors import ConfigError

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000
MS_PER_DAY = 86_400_000
MINUTES_PER_DAY = 1440


# ============================================================
# Instant <-> datetime
# ============================================================

def instant_from_datetime(dt: datetime) -> int:
    """datetime -> Instant (epoch milliseconds). Requires a timezone-aware datetime."""
    if dt.tzinfo is None:
        raise ConfigError("datetime must be timezone-aware")
    delta = dt.astimezone(timezone.utc) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta.days * MS_PER_DAY + delta.seconds * 1000 + delta.microseconds // 1000


def instant_to_datetime(instant: int, *, utc_offset_minutes: int = 0) -> datetime:
    """Instant -> timezone-aware datetime at a fixed UTC offset."""
    tz = timezone(timedelta(minutes=utc_offset_minutes))
    base = datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (base + timedelta(milliseconds=instant)).astimezone(tz)


def local_midnight_instant(d: date, *, utc_offset_minutes: int = 0) -> int:
    """Instant of 00:00 local time on a civil date at a fixed UTC offset."""
    tz = timezone(timedelta(minutes=utc_offset_minutes))
    return instant_from_datetime(datetime(d.year, d.month, d.day, tzinfo=tz))


def parse_iso_instant(s: str) -> int:
    """
    ISO-8601 string -> Instant.
    Accepts a trailing 'Z'; offset-less timestamps are rejected since they
    do not name an absolute point in time.
    """
    text = s.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError as e:
        raise ConfigError(f"Invalid ISO-8601 timestamp: {s!r}") from e
    return instant_from_datetime(dt)


def format_iso_instant(instant: int) -> str:
    dt = instant_to_datetime(instant)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ============================================================
# Local clock readings
# ============================================================

def wall_clock_ms() -> int:
    """Local wall-clock time as an Instant."""
    return time.time_ns() // 1_000_000


def monotonic_ms() -> int:
    """Local monotonic clock in milliseconds (arbitrary origin)."""
    return time.monotonic_ns() // 1_000_000


def minutes_of_day(instant: int, *, utc_offset_minutes: int = 0) -> float:
    """Fractional minutes since local midnight, in [0, 1440)."""
    local_ms = (instant + utc_offset_minutes * MS_PER_MINUTE) % MS_PER_DAY
    return local_ms / MS_PER_MINUTE
