"""
creatorcal.engines.dayparts
---------------------------
The two subdivisions of the day.

  * 18 fixed parts of 80 minutes (18 x 80 = 1440), counted from a local day
    start (midnight by default; the Creator preset starts at sunrise).
  * 4 solar-variable parts: morning (sunrise -> noon), day and evening
    (noon -> sunset, divided by a configurable split) and night
    (sunset -> next sunrise).
"""

from __future__ import annotations

import math
from typing import List

from ..core.errors import ConfigError
from ..core.time import MINUTES_PER_DAY, MS_PER_DAY, MS_PER_MINUTE, minutes_of_day
from ..core.types import CreatorTime, DayPart4, SolarTimes, SpanAngles

PART_MINUTES = 80
PARTS_PER_DAY = 18
PART_MS = PART_MINUTES * MS_PER_MINUTE
PART_DEGREES = 360.0 / PARTS_PER_DAY

DEFAULT_SPLIT = 0.5
DEFAULT_MIN_SPAN_HOURS = 1.0 / 60.0


# ============================================================
# 18 fixed parts
# ============================================================

def _ms_since_day_start(instant: int, utc_offset_minutes: int, day_start_minutes: int) -> int:
    return (instant + (utc_offset_minutes - day_start_minutes) * MS_PER_MINUTE) % MS_PER_DAY


def day_part18(instant: int, *, utc_offset_minutes: int = 0, day_start_minutes: int = 0) -> int:
    """Instant -> 1..18."""
    elapsed = _ms_since_day_start(instant, utc_offset_minutes, day_start_minutes)
    return min(max(elapsed // PART_MS + 1, 1), PARTS_PER_DAY)


def creator_time(instant: int, *, utc_offset_minutes: int = 0, day_start_minutes: int = 0) -> CreatorTime:
    """Instant -> (part 1..18, minute 1..80 within the part)."""
    elapsed = _ms_since_day_start(instant, utc_offset_minutes, day_start_minutes)
    part = min(max(elapsed // PART_MS + 1, 1), PARTS_PER_DAY)
    minute = (elapsed % PART_MS) // MS_PER_MINUTE + 1
    return CreatorTime(part=part, minute=minute)


def to_standard_minutes(ct: CreatorTime) -> int:
    """CreatorTime -> minutes since day start (0..1439)."""
    return (ct.part - 1) * PART_MINUTES + (ct.minute - 1)


def from_standard_minutes(minutes: int) -> CreatorTime:
    total = minutes % MINUTES_PER_DAY
    return CreatorTime(part=total // PART_MINUTES + 1, minute=total % PART_MINUTES + 1)


def hand_angle(ct: CreatorTime) -> float:
    """Watch-hand angle in degrees: part 1 at the top (90), advancing anti-clockwise."""
    return 90.0 + (ct.part - 1) * PART_DEGREES + ((ct.minute - 1) / PART_MINUTES) * PART_DEGREES


# ============================================================
# 4 solar-variable parts
# ============================================================

def span_hours(solar: SolarTimes, *, split: float = DEFAULT_SPLIT) -> List[float]:
    """Raw [morning, day, evening, night] spans in hours, before clamping."""
    if not 0.0 < split < 1.0:
        raise ConfigError("split must lie strictly between 0 and 1")
    morning = solar.solar_noon - solar.sunrise
    after_noon = solar.sunset - solar.solar_noon
    day = after_noon * split
    evening = after_noon - day
    night = 24.0 - (solar.sunset - solar.sunrise)
    return [morning, day, evening, night]


def clamp_spans(spans: List[float], *, min_span_hours: float = DEFAULT_MIN_SPAN_HOURS):
    """
    Clamp every span to at least `min_span_hours` and rescale to 24h.
    Returns (spans, degenerate) where degenerate reports whether clamping applied.
    """
    degenerate = False
    out = []
    for s in spans:
        if not math.isfinite(s) or s < min_span_hours:
            s = min_span_hours
            degenerate = True
        out.append(s)
    scale = 24.0 / sum(out)
    return [s * scale for s in out], degenerate


def day_part4(
    instant: int,
    solar: SolarTimes,
    *,
    utc_offset_minutes: int = 0,
    split: float = DEFAULT_SPLIT,
    min_span_hours: float = DEFAULT_MIN_SPAN_HOURS,
) -> DayPart4:
    """Instant + that day's solar times -> current part (1..4) and the four span angles."""
    spans, degenerate = clamp_spans(span_hours(solar, split=split), min_span_hours=min_span_hours)
    degenerate = degenerate or solar.polar is not None

    morning, day, evening = (s / 24.0 * 360.0 for s in spans[:3])
    angles = SpanAngles(morning=morning, day=day, evening=evening, night=360.0 - (morning + day + evening))

    hours = minutes_of_day(instant, utc_offset_minutes=utc_offset_minutes) / 60.0
    since_sunrise = (hours - solar.sunrise) % 24.0

    part = 4
    edge = 0.0
    for i, s in enumerate(spans[:3], start=1):
        edge += s
        if since_sunrise < edge:
            part = i
            break

    return DayPart4(part=part, angles=angles, degenerate=degenerate)
