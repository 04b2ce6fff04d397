"""
creatorcal.sync.scheduler
-------------------------
The Update Scheduler owns cadence only. Each tick it:

  1. starts a background refresh of the clock if one is due (never awaited),
  2. takes the controller's current estimate,
  3. runs the engine pipeline on it,
  4. hands the resulting EngineState to its single consumer.

A consumer that raises loses only that tick; the loop keeps running.
Reduced motion is an input, not something the scheduler decides.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from ..core.errors import CreatorCalError
from ..core.types import EngineState, NowEstimate
from .clock import ClockSyncController

logger = logging.getLogger(__name__)

ANIMATED_INTERVAL_MS = 100
REDUCED_INTERVAL_MS = 60_000

Consumer = Callable[[EngineState], None]
Pipeline = Callable[[NowEstimate], EngineState]


class MotionMode(str, Enum):
    ANIMATED = "animated"
    REDUCED = "reduced"


INTERVALS_MS = {
    MotionMode.ANIMATED: ANIMATED_INTERVAL_MS,
    MotionMode.REDUCED: REDUCED_INTERVAL_MS,
}


class UpdateScheduler:
    def __init__(
        self,
        controller: ClockSyncController,
        pipeline: Pipeline,
        consumer: Consumer,
        *,
        reduced_motion: bool = False,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.controller = controller
        self.pipeline = pipeline
        self.consumer = consumer
        self.mode = MotionMode.REDUCED if reduced_motion else MotionMode.ANIMATED
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self._stopped = True
        self.ticks_emitted = 0

    @property
    def interval_ms(self) -> int:
        return INTERVALS_MS[self.mode]

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def set_reduced_motion(self, reduced: bool) -> None:
        """Switch cadence; takes effect from the next sleep."""
        self.mode = MotionMode.REDUCED if reduced else MotionMode.ANIMATED

    def tick(self) -> Optional[EngineState]:
        """
        One step; must run on an event loop (the refresh is scheduled on it).
        Returns the emitted state, or None if nothing was emitted.
        """
        if self._stopped and self._task is not None:
            return None
        self.controller.start_refresh()
        now = self.controller.estimate_now()
        try:
            state = self.pipeline(now)
        except CreatorCalError:
            logger.exception("pipeline failed at instant %d; tick skipped", now.instant)
            return None
        try:
            self.consumer(state)
        except Exception:
            logger.exception("consumer failed at instant %d; tick dropped", state.instant)
            return None
        self.ticks_emitted += 1
        return state

    async def _run(self) -> None:
        logger.info("scheduler started: mode=%s interval=%dms", self.mode.value, self.interval_ms)
        while not self._stopped:
            self.tick()
            await self._sleep(self.interval_ms / 1000.0)

    async def start(self) -> None:
        if self.running:
            return
        self._stopped = False
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._on_loop_done)

    def _on_loop_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("scheduler loop crashed after %d ticks", self.ticks_emitted, exc_info=exc)

    async def stop(self) -> None:
        """Stop ticking. No tick is emitted after this returns; an in-flight fetch is cancelled."""
        self._stopped = True
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self.controller.cancel()
        logger.info("scheduler stopped after %d ticks", self.ticks_emitted)
