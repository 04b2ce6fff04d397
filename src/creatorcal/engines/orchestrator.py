"""
creatorcal.engines.orchestrator
-------------------------------
Binds the pure models (calendar, day parts, solar times, rotations) into one
pipeline driven by an EngineSpec. Holds no time-derived state: every method
is a function of its Instant argument and the immutable spec.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Tuple

from ..core.types import (
    CalendarDate,
    CreatorTime,
    DayPart4,
    EngineSpec,
    EngineState,
    NowEstimate,
    RingState,
    SolarTimes,
)
from . import calendar as cal
from . import dayparts as dp
from .rotation import compute_rotations
from .solar import solar_times


class CreatorEngine:
    def __init__(self, spec: EngineSpec):
        self.spec = spec
        self._offset = spec.location.utc_offset_minutes
        # Solar times depend only on (day_of_year, spec); memoise per engine.
        self._solar = lru_cache(maxsize=512)(self._solar_uncached)

    def info(self) -> Dict[str, Any]:
        s = self.spec
        return {
            "name": s.name,
            "epoch": s.calendar.epoch,
            "first_year": s.calendar.first_year,
            "month_lengths": list(s.calendar.month_lengths),
            "leap_rule": repr(s.calendar.leap_rule),
            "latitude": s.location.latitude,
            "longitude": s.location.longitude,
            "utc_offset_minutes": s.location.utc_offset_minutes,
            "day_split": s.day_split,
            "day_start_minutes": s.day_start_minutes,
            **s.meta,
        }

    # ---------------------------------------------------------
    # Pure derivations
    # ---------------------------------------------------------

    def calendar_date(self, instant: int) -> CalendarDate:
        return cal.calendar_date(instant, self.spec.calendar)

    def day_part18(self, instant: int) -> int:
        return dp.day_part18(instant, utc_offset_minutes=self._offset, day_start_minutes=self.spec.day_start_minutes)

    def creator_time(self, instant: int) -> CreatorTime:
        return dp.creator_time(instant, utc_offset_minutes=self._offset, day_start_minutes=self.spec.day_start_minutes)

    def _solar_uncached(self, day_of_year: int) -> SolarTimes:
        loc = self.spec.location
        return solar_times(
            day_of_year,
            loc.latitude,
            longitude=loc.longitude,
            utc_offset_hours=loc.utc_offset_minutes / 60.0,
            equinox_day=self.spec.equinox_day,
        )

    def solar_times(self, day_of_year: int) -> SolarTimes:
        return self._solar(day_of_year)

    def day_part4(self, instant: int) -> DayPart4:
        return self._day_part4(instant, self.calendar_date(instant))

    def _day_part4(self, instant: int, date: CalendarDate) -> DayPart4:
        return dp.day_part4(
            instant,
            self.solar_times(date.day_of_year),
            utc_offset_minutes=self._offset,
            split=self.spec.day_split,
        )

    def rotations(self, instant: int) -> RingState:
        return self._derive(instant)[3]

    def _derive(self, instant: int) -> Tuple[CalendarDate, int, DayPart4, RingState]:
        date = self.calendar_date(instant)
        part18 = self.day_part18(instant)
        part4 = self._day_part4(instant, date)
        return date, part18, part4, compute_rotations(date, part18, part4)

    # ---------------------------------------------------------
    # Per-tick state
    # ---------------------------------------------------------

    def state(self, now: NowEstimate) -> EngineState:
        date, part18, part4, rings = self._derive(now.instant)
        return EngineState(
            instant=now.instant,
            authoritative=now.authoritative,
            status=now.status,
            date=date,
            day_part18=part18,
            creator_time=self.creator_time(now.instant),
            day_part4=part4,
            rings=rings,
        )

    # ---------------------------------------------------------
    # Week helpers
    # ---------------------------------------------------------

    def week_id(self, instant: int) -> str:
        return self.calendar_date(instant).week_id

    def time_until_week_end(self, instant: int) -> Tuple[int, int, int]:
        return cal.time_until_week_end(instant, self.spec.calendar)
