"""
creatorcal.engines.leap
-----------------------
Leap-year rules. A leap year carries two out-of-time days after day 364
(366 days in total); a common year carries one (365 days).

Rules are pure data. `cycle()` lets the calendar skip whole cycles of years
in one step; a rule without a fixed cycle returns None and years are walked
one at a time.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Optional, Protocol, Tuple

from ..core.errors import ConfigError

COMMON_YEAR_DAYS = 365
LEAP_YEAR_DAYS = 366


class LeapRule(Protocol):
    def is_leap(self, year: int) -> bool: ...
    def cycle(self) -> Optional[Tuple[int, int]]:
        """(years, days) of a repeating cycle, or None."""
        ...


@dataclass(frozen=True)
class EveryNthYear(LeapRule):
    """Year y is leap iff y % n == phase. Default: every 4th year (4, 8, 12, ...)."""
    n: int = 4
    phase: int = 0

    def __post_init__(self) -> None:
        if self.n < 1:
            raise ConfigError("leap cycle length must be >= 1")
        if not 0 <= self.phase < self.n:
            raise ConfigError(f"leap phase must lie in [0, {self.n})")

    def is_leap(self, year: int) -> bool:
        return year % self.n == self.phase

    def cycle(self) -> Optional[Tuple[int, int]]:
        return self.n, self.n * COMMON_YEAR_DAYS + 1


@dataclass(frozen=True)
class NoLeapYears(LeapRule):
    """Every year has a single out-of-time day."""

    def is_leap(self, year: int) -> bool:
        return False

    def cycle(self) -> Optional[Tuple[int, int]]:
        return 1, COMMON_YEAR_DAYS


@dataclass(frozen=True)
class ExplicitLeapYears(LeapRule):
    """Leap years listed explicitly (e.g. from an observed tequfah table)."""
    years: FrozenSet[int] = frozenset()

    def is_leap(self, year: int) -> bool:
        return year in self.years

    def cycle(self) -> Optional[Tuple[int, int]]:
        return None


def year_length(year: int, rule: LeapRule) -> int:
    return LEAP_YEAR_DAYS if rule.is_leap(year) else COMMON_YEAR_DAYS
