from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .core.engine import CalendarEngine, EngineRegistry
from .core.types import CalendarDate, CreatorTime, DayPart4, EngineSpec, EngineState, LocationSpec, NowEstimate, RingState, SolarTimes, SyncStatus
from .engines.factory import make_engine as _make_engine, with_location
from .sync.clock import ClockSyncController
from .sync.scheduler import Consumer, UpdateScheduler
from .sync.source import TimeSource

DEFAULT_ENGINE = "creator"
_registry: Optional[EngineRegistry] = None

def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def list_engines() -> List[str]:
    return _reg().list()

def engine_info(engine: str = DEFAULT_ENGINE) -> Dict[str, Any]:
    return _reg().get(engine).info()

def get_engine(engine: str = DEFAULT_ENGINE) -> CalendarEngine:
    return _reg().get(engine)

def make_engine(spec: EngineSpec, *, location: Optional[LocationSpec] = None) -> CalendarEngine:
    return _make_engine(with_location(spec, location))

def register_engine(name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

# ============================================================
# Pure derivations on a named engine
# ============================================================

def calendar_date(instant: int, *, engine: str = DEFAULT_ENGINE) -> CalendarDate:
    return _reg().get(engine).calendar_date(instant)

def day_part18(instant: int, *, engine: str = DEFAULT_ENGINE) -> int:
    return _reg().get(engine).day_part18(instant)

def creator_time(instant: int, *, engine: str = DEFAULT_ENGINE) -> CreatorTime:
    return _reg().get(engine).creator_time(instant)

def solar_times(day_of_year: int, *, engine: str = DEFAULT_ENGINE) -> SolarTimes:
    return _reg().get(engine).solar_times(day_of_year)

def day_part4(instant: int, *, engine: str = DEFAULT_ENGINE) -> DayPart4:
    return _reg().get(engine).day_part4(instant)

def rotations(instant: int, *, engine: str = DEFAULT_ENGINE) -> RingState:
    return _reg().get(engine).rotations(instant)

def state_at(instant: int, *, engine: str = DEFAULT_ENGINE, authoritative: bool = True) -> EngineState:
    """Full per-tick state for a known instant (no clock involved)."""
    status = SyncStatus.SYNCED if authoritative else SyncStatus.UNINITIALIZED
    return _reg().get(engine).state(NowEstimate(instant=instant, authoritative=authoritative, status=status))

def week_id(instant: int, *, engine: str = DEFAULT_ENGINE) -> str:
    return _reg().get(engine).week_id(instant)

def time_until_week_end(instant: int, *, engine: str = DEFAULT_ENGINE) -> Tuple[int, int, int]:
    return _reg().get(engine).time_until_week_end(instant)

# ============================================================
# Live wiring
# ============================================================

def make_scheduler(
    source: TimeSource,
    consumer: Consumer,
    *,
    engine: str = DEFAULT_ENGINE,
    reduced_motion: bool = False,
) -> UpdateScheduler:
    """Controller + scheduler for a named engine, using the engine's sync intervals."""
    eng = _reg().get(engine)
    spec = eng.spec
    controller = ClockSyncController(
        source,
        throttle_ms=spec.throttle_ms,
        stale_after_ms=spec.stale_after_ms,
        stale_after_failures=spec.stale_after_failures,
    )
    return UpdateScheduler(controller, eng.state, consumer, reduced_motion=reduced_motion)
