"""
creatorcal.engines.calendar
---------------------------
The Calendar Model. Maps an absolute Instant (epoch milliseconds) to a
CalendarDate under the fixed 364-day structure:

  * 12 months whose lengths come from the month table (sum = 364),
  * a 7-day week aligned to day 1 of every year,
  * 1 or 2 out-of-time days after day 364, outside months and weeks.

All day counting is integer arithmetic; no floating point enters the date.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from ..core.errors import BeforeEpochError, ConfigError
from ..core.time import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE
from ..core.types import (
    DEFAULT_MONTH_LENGTHS,
    REGULAR_DAYS,
    WEEK_DAYS,
    CalendarDate,
    CalendarSpec,
)
from .leap import EveryNthYear, LeapRule, year_length

DEFAULT_LEAP_RULE = EveryNthYear()


# ---------------------------------------------------------
# Year and month arithmetic
# ---------------------------------------------------------

def _locate_year(days: int, spec: CalendarSpec) -> Tuple[int, int]:
    """Whole days since epoch (>= 0) -> (year, zero-based day index within the year)."""
    rule = spec.leap_rule
    year = spec.first_year

    cyc = rule.cycle()
    if cyc is not None:
        years, span = cyc
        k, days = divmod(days, span)
        year += k * years

    while True:
        n = year_length(year, rule)
        if days < n:
            return year, days
        days -= n
        year += 1


def _month_and_day(day_of_year: int, month_lengths: Sequence[int]) -> Tuple[int, int]:
    acc = 0
    for month, n in enumerate(month_lengths, start=1):
        if day_of_year <= acc + n:
            return month, day_of_year - acc
        acc += n
    raise RuntimeError("unreachable")


def weekday_of(day_of_year: int) -> int:
    return (day_of_year - 1) % WEEK_DAYS + 1


# ---------------------------------------------------------
# Forward: Instant -> CalendarDate
# ---------------------------------------------------------

def calendar_date(instant: int, spec: CalendarSpec) -> CalendarDate:
    """Instant -> CalendarDate. Raises BeforeEpochError for instants before the epoch."""
    if instant < spec.epoch:
        raise BeforeEpochError(f"instant {instant} precedes epoch {spec.epoch}")

    days = (instant - spec.epoch) // MS_PER_DAY
    year, index = _locate_year(days, spec)
    day_of_year = index + 1

    if day_of_year > REGULAR_DAYS:
        return CalendarDate(year=year, month=None, day_of_month=None, day_of_year=day_of_year, weekday=None)

    month, day_of_month = _month_and_day(day_of_year, spec.month_lengths)
    return CalendarDate(
        year=year,
        month=month,
        day_of_month=day_of_month,
        day_of_year=day_of_year,
        weekday=weekday_of(day_of_year),
    )


def to_calendar_date(
    instant: int,
    epoch: int,
    *,
    leap_rule: LeapRule = DEFAULT_LEAP_RULE,
    first_year: int = 1,
    month_lengths: Sequence[int] = DEFAULT_MONTH_LENGTHS,
) -> CalendarDate:
    """Instant + epoch -> CalendarDate, with the structure given as keywords."""
    spec = CalendarSpec(epoch=epoch, leap_rule=leap_rule, first_year=first_year, month_lengths=tuple(month_lengths))
    return calendar_date(instant, spec)


# ---------------------------------------------------------
# Inverse: labels -> day counts and Instants
# ---------------------------------------------------------

def year_start_day(year: int, spec: CalendarSpec) -> int:
    """Whole days from the epoch to day 1 of `year`."""
    if year < spec.first_year:
        raise ConfigError(f"year {year} precedes first year {spec.first_year}")
    rule = spec.leap_rule
    offset = year - spec.first_year
    days = 0
    y = spec.first_year

    cyc = rule.cycle()
    if cyc is not None:
        years, span = cyc
        k, _ = divmod(offset, years)
        days += k * span
        y += k * years

    while y < year:
        days += year_length(y, rule)
        y += 1
    return days


def day_of_year_from_month(month: int, day_of_month: int, spec: CalendarSpec) -> int:
    if not 1 <= month <= 12:
        raise ConfigError(f"month out of range: {month}")
    n = spec.month_lengths[month - 1]
    if not 1 <= day_of_month <= n:
        raise ConfigError(f"month {month} has {n} days, got day {day_of_month}")
    return sum(spec.month_lengths[: month - 1]) + day_of_month


def day_start_instant(year: int, day_of_year: int, spec: CalendarSpec) -> int:
    """Instant at which (year, day_of_year) begins."""
    n = year_length(year, spec.leap_rule)
    if not 1 <= day_of_year <= n:
        raise ConfigError(f"year {year} has {n} days, got day {day_of_year}")
    return spec.epoch + (year_start_day(year, spec) + day_of_year - 1) * MS_PER_DAY


# ---------------------------------------------------------
# Week countdown
# ---------------------------------------------------------

def days_until_week_end(date: CalendarDate) -> int:
    """
    Whole days from `date` to the next 7th weekday, strictly ahead (1..7).
    On an out-of-time day the count runs to day 7 of the following year.
    """
    if date.weekday is None:
        return REGULAR_DAYS + WEEK_DAYS - date.day_of_year
    return (WEEK_DAYS - date.weekday) or WEEK_DAYS


def next_week_end(instant: int, spec: CalendarSpec) -> int:
    """Instant at which the next 7th weekday begins, strictly after the current day."""
    d = calendar_date(instant, spec)
    target = d.day_of_year + days_until_week_end(d)

    if target > REGULAR_DAYS:
        return day_start_instant(d.year + 1, target - REGULAR_DAYS, spec)
    return day_start_instant(d.year, target, spec)


def time_until_week_end(instant: int, spec: CalendarSpec) -> Tuple[int, int, int]:
    """(days, hours, minutes) until the next week end, floored to whole minutes."""
    remaining = next_week_end(instant, spec) - instant
    days, rest = divmod(remaining, MS_PER_DAY)
    hours, rest = divmod(rest, MS_PER_HOUR)
    return days, hours, rest // MS_PER_MINUTE
