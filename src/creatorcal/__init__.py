"""creatorcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    calendar_date,
    day_part18,
    creator_time,
    solar_times,
    day_part4,
    rotations,
    state_at,
    week_id,
    time_until_week_end,
    list_engines,
    engine_info,
    get_engine,
    make_engine,
    register_engine,
    make_scheduler,
)
from .core.errors import BeforeEpochError, ConfigError, CreatorCalError, TimeSourceError
from .core.types import CalendarDate, DayPart4, EngineState, RingState, SyncStatus
from .engines.calendar import to_calendar_date
from .engines.dayparts import day_part18 as compute_day_part18, day_part4 as compute_day_part4
from .engines.rotation import compute_rotations
from .engines.solar import solar_times as compute_solar_times
from .sync.clock import ClockSyncController
from .sync.scheduler import UpdateScheduler
from .sync.source import HttpTimeSource

__all__ = [
    "calendar_date",
    "day_part18",
    "creator_time",
    "solar_times",
    "day_part4",
    "rotations",
    "state_at",
    "week_id",
    "time_until_week_end",
    "list_engines",
    "engine_info",
    "get_engine",
    "make_engine",
    "register_engine",
    "make_scheduler",
    "to_calendar_date",
    "compute_day_part18",
    "compute_day_part4",
    "compute_solar_times",
    "compute_rotations",
    "ClockSyncController",
    "UpdateScheduler",
    "HttpTimeSource",
    "CalendarDate",
    "DayPart4",
    "EngineState",
    "RingState",
    "SyncStatus",
    "CreatorCalError",
    "BeforeEpochError",
    "ConfigError",
    "TimeSourceError",
]
