"""
creatorcal.engines.rotation
---------------------------
Ring angles for the calendar wheel. Every ring turns against the direction of
calendar advance:

    angle = -(((index - 1) mod period) / period) * 360      in (-360, 0]

The function is pure: it reads only its arguments.
"""

from __future__ import annotations

from typing import Dict

from ..core.types import REGULAR_DAYS, WEEK_DAYS, WEEKS_PER_YEAR, CalendarDate, DayPart4, RingState

RING_PERIODS: Dict[str, int] = {
    "year": REGULAR_DAYS,
    "week": WEEK_DAYS,
    "month": 12,
    "omer": 7,         # weeks
    "creation": WEEK_DAYS,
    "day18": 18,
    "quadrant": 4,
    "timeless": 2,
}


def ring_angle(index: int, period: int) -> float:
    # + 0.0 folds -0.0 into 0.0
    return -(((index - 1) % period) / period) * 360.0 + 0.0


def compute_rotations(date: CalendarDate, day_part18: int, day_part4: DayPart4) -> RingState:
    """
    CalendarDate + both day parts -> RingState.
    On out-of-time days the calendar rings hold their day-364 position and
    only the timeless ring is active. The timeless angle alone cannot tell
    day 365 from a regular day: both read 0.0 (day 366 reads -180). Renderers
    must use `timeless_active` to decide whether the ring is shown.
    """
    timeless_active = date.is_timeless
    if timeless_active:
        day_of_year = REGULAR_DAYS
        weekday = WEEK_DAYS
        month = 12
        week_of_year = WEEKS_PER_YEAR
    else:
        day_of_year = date.day_of_year
        weekday = date.weekday
        month = date.month
        week_of_year = date.week_of_year

    timeless = ring_angle(date.timeless_day, RING_PERIODS["timeless"]) if timeless_active else 0.0

    return RingState(
        year=ring_angle(day_of_year, RING_PERIODS["year"]),
        week=ring_angle(weekday, RING_PERIODS["week"]),
        month=ring_angle(month, RING_PERIODS["month"]),
        omer=ring_angle(week_of_year, RING_PERIODS["omer"]),
        creation=ring_angle(weekday, RING_PERIODS["creation"]),
        day18=ring_angle(day_part18, RING_PERIODS["day18"]),
        quadrant=ring_angle(day_part4.part, RING_PERIODS["quadrant"]),
        timeless=timeless,
        timeless_active=timeless_active,
    )
