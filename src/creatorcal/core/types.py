from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple

from .errors import ConfigError

REGULAR_DAYS = 364
WEEK_DAYS = 7
WEEKS_PER_YEAR = 52
DEFAULT_MONTH_LENGTHS: Tuple[int, ...] = (30, 30, 31) * 4
PART4_NAMES: Tuple[str, ...] = ("morning", "day", "evening", "night")

# ============================================================
# Derived calendar state
# ============================================================

@dataclass(frozen=True)
class CalendarDate:
    year: int
    month: Optional[int]
    day_of_month: Optional[int]
    day_of_year: int
    weekday: Optional[int]

    @property
    def is_timeless(self) -> bool:
        return self.day_of_year > REGULAR_DAYS

    @property
    def timeless_day(self) -> int:
        """0 on regular days, 1 or 2 on the out-of-time days."""
        return max(0, self.day_of_year - REGULAR_DAYS)

    @property
    def week_of_year(self) -> Optional[int]:
        if self.is_timeless:
            return None
        return (self.day_of_year - 1) // WEEK_DAYS + 1

    @property
    def quarter(self) -> Optional[int]:
        if self.month is None:
            return None
        return (self.month - 1) // 3 + 1

    @property
    def week_id(self) -> str:
        # Out-of-time days are reported against the last week of the year.
        week = self.week_of_year or WEEKS_PER_YEAR
        return f"{self.year}_{week:02d}"


@dataclass(frozen=True)
class CreatorTime:
    part: int     # 1..18
    minute: int   # 1..80 within the part


@dataclass(frozen=True)
class SolarTimes:
    """Sunrise, solar noon and sunset in local clock hours."""
    sunrise: float
    solar_noon: float
    sunset: float
    polar: Optional[Literal["day", "night"]] = None

    @property
    def day_length(self) -> float:
        return self.sunset - self.sunrise


@dataclass(frozen=True)
class SpanAngles:
    morning: float
    day: float
    evening: float
    night: float

    def total(self) -> float:
        return self.morning + self.day + self.evening + self.night

    def as_dict(self) -> Dict[str, float]:
        return {"morning": self.morning, "day": self.day, "evening": self.evening, "night": self.night}


@dataclass(frozen=True)
class DayPart4:
    part: int               # 1..4
    angles: SpanAngles      # degrees, sum = 360
    degenerate: bool = False

    @property
    def name(self) -> str:
        return PART4_NAMES[self.part - 1]


@dataclass(frozen=True)
class RingState:
    year: float
    week: float
    month: float
    omer: float
    creation: float
    day18: float
    quadrant: float
    timeless: float
    timeless_active: bool = False

    def as_dict(self) -> Dict[str, float]:
        return {
            "year": self.year,
            "week": self.week,
            "month": self.month,
            "omer": self.omer,
            "creation": self.creation,
            "day18": self.day18,
            "quadrant": self.quadrant,
            "timeless": self.timeless,
        }

# ============================================================
# Clock synchronization
# ============================================================

class SyncStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    SYNCED = "synced"
    STALE = "stale"


@dataclass(frozen=True)
class ClockEstimate:
    server_instant_at_fetch: int
    local_monotonic_at_fetch: int
    last_fetch_succeeded: bool = True
    round_trip_ms: int = 0
    wall_clock_at_fetch: Optional[int] = None


@dataclass(frozen=True)
class NowEstimate:
    instant: int
    authoritative: bool
    status: SyncStatus


@dataclass(frozen=True)
class EngineState:
    """Everything the renderer receives for one tick."""
    instant: int
    authoritative: bool
    status: SyncStatus
    date: CalendarDate
    day_part18: int
    creator_time: CreatorTime
    day_part4: DayPart4
    rings: RingState

    def as_tuple(self) -> Tuple[CalendarDate, int, DayPart4, RingState]:
        return (self.date, self.day_part18, self.day_part4, self.rings)

# ============================================================
# Configuration payloads
# ============================================================

@dataclass(frozen=True)
class CalendarSpec:
    """Pure data payload describing the year structure."""
    epoch: int               # Instant of year `first_year`, day 1
    leap_rule: Any           # engines.leap.LeapRule
    first_year: int = 1
    month_lengths: Tuple[int, ...] = DEFAULT_MONTH_LENGTHS

    def __post_init__(self) -> None:
        if len(self.month_lengths) != 12:
            raise ConfigError(f"month table needs 12 entries, got {len(self.month_lengths)}")
        if any(n <= 0 for n in self.month_lengths):
            raise ConfigError("month lengths must be positive")
        if sum(self.month_lengths) != REGULAR_DAYS:
            raise ConfigError(f"month table must sum to {REGULAR_DAYS}, got {sum(self.month_lengths)}")
        if self.first_year < 1:
            raise ConfigError("first_year must be >= 1")


@dataclass(frozen=True)
class LocationSpec:
    latitude: float = 0.0
    longitude: float = 0.0          # degrees, positive East
    utc_offset_minutes: int = 0

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ConfigError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ConfigError(f"longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class EngineSpec:
    """Top-level wrapper for everything a CreatorEngine needs."""
    name: str
    calendar: CalendarSpec
    location: LocationSpec = field(default_factory=LocationSpec)
    day_split: float = 0.5           # share of (sunset - noon) given to "day"
    day_start_minutes: int = 0       # local minute at which part 1 begins
    equinox_day: int = 1             # day of year nearest the March equinox
    throttle_ms: int = 60_000
    stale_after_ms: int = 180_000
    stale_after_failures: int = 3    # consecutive failed fetches
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0.0 < self.day_split < 1.0:
            raise ConfigError("day_split must lie strictly between 0 and 1")
        if not 0 <= self.day_start_minutes < 1440:
            raise ConfigError("day_start_minutes must lie in [0, 1440)")
        if self.throttle_ms < 0 or self.stale_after_ms < 0:
            raise ConfigError("sync intervals must be non-negative")
        if self.stale_after_failures < 1:
            raise ConfigError("stale_after_failures must be >= 1")
