from __future__ import annotations

from datetime import date
from typing import Dict

from ..core.time import MS_PER_MINUTE, local_midnight_instant
from ..core.types import CalendarSpec, EngineSpec, LocationSpec
from .leap import EveryNthYear


# ============================================================
# CREATOR CONSTANTS
# ============================================================

# Johannesburg, SAST (UTC+02:00, no daylight saving)
JHB_UTC_OFFSET_MINUTES = 120
LOC_JOHANNESBURG = LocationSpec(latitude=-26.2, longitude=28.0, utc_offset_minutes=JHB_UTC_OFFSET_MINUTES)

# The day, and part 1 of the 18-part clock, begin at a fixed sunrise of 05:20.
CREATOR_DAY_START_MINUTES = 5 * 60 + 20

# Year 6028, day 1 = the March equinox 2025-03-20, from sunrise.
CREATOR_FIRST_YEAR = 6028
CREATOR_EPOCH = (
    local_midnight_instant(date(2025, 3, 20), utc_offset_minutes=JHB_UTC_OFFSET_MINUTES)
    + CREATOR_DAY_START_MINUTES * MS_PER_MINUTE
)

# Year 6030 (March 2027 - March 2028) spans 29 February 2028: 6030 % 4 == 2.
CREATOR_LEAP_RULE = EveryNthYear(n=4, phase=2)


# ============================================================
# PRESETS
# ============================================================

CREATOR = EngineSpec(
    name="creator",
    calendar=CalendarSpec(epoch=CREATOR_EPOCH, leap_rule=CREATOR_LEAP_RULE, first_year=CREATOR_FIRST_YEAR),
    location=LOC_JOHANNESBURG,
    day_start_minutes=CREATOR_DAY_START_MINUTES,
    meta={"description": "Creator calendar, Johannesburg, day from sunrise"},
)

# Plain reference calendar: year 1 day 1 = 1970-01-01T00:00Z, midnight days, equator.
UNIX = EngineSpec(
    name="unix",
    calendar=CalendarSpec(epoch=0, leap_rule=EveryNthYear(n=4, phase=0), first_year=1),
    location=LocationSpec(),
    meta={"description": "Reference calendar anchored at the Unix epoch"},
)

ALL_SPECS: Dict[str, EngineSpec] = {
    "creator": CREATOR,
    "unix": UNIX,
}
