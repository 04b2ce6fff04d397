from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol

from .types import CalendarDate, DayPart4, EngineState, NowEstimate, RingState, SolarTimes

class CalendarEngine(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def calendar_date(self, instant: int) -> CalendarDate: ...
    def day_part18(self, instant: int) -> int: ...
    def solar_times(self, day_of_year: int) -> SolarTimes: ...
    def day_part4(self, instant: int) -> DayPart4: ...
    def rotations(self, instant: int) -> RingState: ...
    def state(self, now: NowEstimate) -> EngineState: ...

@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
