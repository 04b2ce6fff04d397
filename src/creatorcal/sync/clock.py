"""
creatorcal.sync.clock
---------------------
The Clock Synchronization Controller: the only stateful component that holds
time-derived data.

It keeps one immutable ClockEstimate (server instant + the local monotonic
reading it corresponds to) and extrapolates "now" from it on demand:

    now = server_instant_at_fetch + (monotonic() - local_monotonic_at_fetch)

Every successful fetch replaces the estimate with a single assignment, so a
reader never observes a partially updated value. Failures never clear it. The
status turns STALE once the last good sync is `stale_after_ms` old, or after
`stale_after_failures` fetches in a row have failed; the next success clears
both. Before the first success the local wall clock is returned, flagged as
unauthoritative.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Callable, Optional

from ..core.errors import TimeSourceError
from ..core.time import monotonic_ms, wall_clock_ms
from ..core.types import ClockEstimate, NowEstimate, SyncStatus
from .source import TimeSource

logger = logging.getLogger(__name__)

DEFAULT_THROTTLE_MS = 60_000
DEFAULT_STALE_AFTER_MS = 180_000
DEFAULT_STALE_AFTER_FAILURES = 3


class ClockSyncController:
    def __init__(
        self,
        source: TimeSource,
        *,
        throttle_ms: int = DEFAULT_THROTTLE_MS,
        stale_after_ms: int = DEFAULT_STALE_AFTER_MS,
        stale_after_failures: int = DEFAULT_STALE_AFTER_FAILURES,
        monotonic: Callable[[], int] = monotonic_ms,
        wall_clock: Callable[[], int] = wall_clock_ms,
    ):
        self.source = source
        self.throttle_ms = throttle_ms
        self.stale_after_ms = stale_after_ms
        self.stale_after_failures = stale_after_failures
        self._monotonic = monotonic
        self._wall_clock = wall_clock

        self._estimate: Optional[ClockEstimate] = None
        self._last_attempt: Optional[int] = None
        self._last_emitted: Optional[int] = None
        self._inflight: Optional[asyncio.Task] = None
        self.consecutive_failures = 0

    # ---------------------------------------------------------
    # Observability
    # ---------------------------------------------------------

    @property
    def estimate(self) -> Optional[ClockEstimate]:
        return self._estimate

    def _status_at(self, est: Optional[ClockEstimate], mono: int) -> SyncStatus:
        if est is None:
            return SyncStatus.UNINITIALIZED
        if mono - est.local_monotonic_at_fetch >= self.stale_after_ms:
            return SyncStatus.STALE
        if self.consecutive_failures >= self.stale_after_failures:
            return SyncStatus.STALE
        return SyncStatus.SYNCED

    @property
    def status(self) -> SyncStatus:
        return self._status_at(self._estimate, self._monotonic())

    @property
    def drift_ms(self) -> Optional[int]:
        """Server minus local wall clock at the last successful sync."""
        est = self._estimate
        if est is None or est.wall_clock_at_fetch is None:
            return None
        return est.server_instant_at_fetch - est.wall_clock_at_fetch

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def due(self) -> bool:
        """True once the throttle interval has passed since the last attempt."""
        if self._last_attempt is None:
            return True
        return self._monotonic() - self._last_attempt >= self.throttle_ms

    # ---------------------------------------------------------
    # Fetching
    # ---------------------------------------------------------

    async def fetch_authoritative_time(self) -> int:
        """
        Fetch the server instant and replace the estimate.
        The server reading is attributed to the midpoint of the request.
        Raises TimeSourceError after recording the failure.
        """
        t0 = self._monotonic()
        self._last_attempt = t0
        try:
            server = await self.source.fetch_instant()
        except TimeSourceError:
            self._record_failure()
            raise
        t1 = self._monotonic()
        half_trip = (t1 - t0) // 2

        self._estimate = ClockEstimate(
            server_instant_at_fetch=server,
            local_monotonic_at_fetch=t0 + half_trip,
            last_fetch_succeeded=True,
            round_trip_ms=t1 - t0,
            wall_clock_at_fetch=self._wall_clock() - half_trip,
        )
        self.consecutive_failures = 0
        logger.debug("clock synced: server=%d rtt=%dms drift=%sms", server, t1 - t0, self.drift_ms)
        return server

    def _record_failure(self) -> None:
        self.consecutive_failures += 1
        est = self._estimate
        if est is not None and est.last_fetch_succeeded:
            self._estimate = replace(est, last_fetch_succeeded=False)
        if self.status is SyncStatus.STALE:
            logger.info("clock estimate is stale after %d failed fetches", self.consecutive_failures)

    async def refresh(self, *, force: bool = False) -> bool:
        """Throttled fetch. Returns True on success; failures are logged, not raised."""
        if not force and not self.due():
            return False
        try:
            await self.fetch_authoritative_time()
        except TimeSourceError as e:
            logger.warning("time source fetch failed (%d in a row): %s", self.consecutive_failures, e)
            return False
        return True

    def start_refresh(self, *, force: bool = False) -> Optional[asyncio.Task]:
        """
        Schedule a refresh on the running loop without waiting for it.
        At most one fetch is in flight; returns it, or None if nothing is due.
        """
        if self.in_flight:
            return self._inflight
        if not force and not self.due():
            return None
        task = asyncio.get_running_loop().create_task(self.refresh(force=True))
        task.add_done_callback(self._on_refresh_done)
        self._inflight = task
        return task

    def _on_refresh_done(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("time refresh crashed", exc_info=exc)

    async def cancel(self) -> None:
        """Cancel an in-flight fetch; its result is discarded."""
        task = self._inflight
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    # ---------------------------------------------------------
    # Estimation
    # ---------------------------------------------------------

    def estimate_now(self) -> NowEstimate:
        """Best-effort current instant. Never raises and never regresses once synced."""
        mono = self._monotonic()
        est = self._estimate
        if est is None:
            return NowEstimate(instant=self._wall_clock(), authoritative=False, status=SyncStatus.UNINITIALIZED)

        instant = est.server_instant_at_fetch + (mono - est.local_monotonic_at_fetch)
        if self._last_emitted is not None and instant < self._last_emitted:
            instant = self._last_emitted
        self._last_emitted = instant
        return NowEstimate(instant=instant, authoritative=True, status=self._status_at(est, mono))
