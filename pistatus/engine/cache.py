from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from pistatus.models import LiveMetrics, MachineIdentity

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    computed_at: float

    def is_stale(self, now: float, freshness_window: float) -> bool:
        return now - self.computed_at >= freshness_window


class StatusCache:
    """Holds the compute-once identity and the time-bounded live sample.

    Each entry has its own lock so overlapping requests on a stale entry
    share one recomputation. A compute function that raises leaves the
    entry untouched; the next request tries again.
    """

    def __init__(
        self,
        freshness_window: float = 10.0,
        clock: Clock = time.monotonic,
    ) -> None:
        self.freshness_window = freshness_window
        self._clock = clock
        self._identity: CacheEntry[MachineIdentity] | None = None
        self._live: CacheEntry[LiveMetrics] | None = None
        self._identity_lock = asyncio.Lock()
        self._live_lock = asyncio.Lock()

    async def get_identity(
        self, compute_fn: Callable[[], Awaitable[MachineIdentity]]
    ) -> MachineIdentity:
        if self._identity is not None:
            return self._identity.value
        async with self._identity_lock:
            if self._identity is None:
                value = await compute_fn()
                self._identity = CacheEntry(value, self._clock())
                logger.debug("Machine identity cached")
        return self._identity.value

    async def get_live(
        self, compute_fn: Callable[[], Awaitable[LiveMetrics]]
    ) -> LiveMetrics:
        entry = self._live
        if entry is not None and not entry.is_stale(self._clock(), self.freshness_window):
            return entry.value
        async with self._live_lock:
            # another request may have refreshed while we waited
            entry = self._live
            if entry is not None and not entry.is_stale(self._clock(), self.freshness_window):
                return entry.value
            started = self._clock()
            value = await compute_fn()
            self._live = CacheEntry(value, started)
            logger.debug("Live metrics refreshed at %.3f", started)
            return value

    # ── introspection ───────────────────────────────────

    @property
    def identity_entry(self) -> CacheEntry[MachineIdentity] | None:
        return self._identity

    @property
    def live_entry(self) -> CacheEntry[LiveMetrics] | None:
        return self._live
