"""
Process-local, time-bounded copy of the active rule set.
Concurrent misses share one in-flight refresh; reset() invalidates synchronously.
The rule list is replaced whole on refresh, never mutated in place.
"""
import asyncio
import logging
import time
from typing import Callable, List, Optional

from .ruling_schema import RulingRule, validate_rulings
from .ruling_store import RulingStore
from halal_engine import config

logger = logging.getLogger(__name__)


class RuleCache:
    """
    get() returns the cached active rules while fresh; otherwise refreshes from the store.
    Store reads run in a worker thread. A failed refresh (store error or
    RulingValidationError) propagates to every waiter and keeps the previous contents.
    """

    def __init__(
        self,
        store: RulingStore,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store = store
        self._ttl = config.RULINGS_CACHE_TTL if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._rules: Optional[List[RulingRule]] = None
        self._loaded_at: float = 0.0
        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None
        self.refresh_count = 0

    @property
    def store(self) -> RulingStore:
        return self._store

    @property
    def is_fresh(self) -> bool:
        if self._rules is None:
            return False
        return (self._clock() - self._loaded_at) < self._ttl

    async def get(self) -> List[RulingRule]:
        if self.is_fresh:
            return self._rules
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.get_running_loop().create_task(self._refresh())
        task = self._inflight
        try:
            # shield: one cancelled caller must not cancel the refresh for the others
            return await asyncio.shield(task)
        finally:
            if self._inflight is task and task.done():
                self._inflight = None

    async def _refresh(self) -> List[RulingRule]:
        generation = self._generation
        self.refresh_count += 1
        logger.info("RULINGS_CACHE refresh store=%s", self._store.name)
        rules = await asyncio.to_thread(self._store.list_rules, True)
        rules = [r for r in rules if r.is_active]
        validate_rulings(rules)
        if generation == self._generation:
            self._rules = rules
            self._loaded_at = self._clock()
            logger.info("RULINGS_CACHE loaded count=%d ttl=%ss", len(rules), self._ttl)
        else:
            logger.info("RULINGS_CACHE refresh finished after reset; result not cached")
        return rules

    def reset(self) -> None:
        """Drop cached rules; the next get() triggers a fresh load."""
        self._generation += 1
        self._rules = None
        self._loaded_at = 0.0
        self._inflight = None
        logger.debug("RULINGS_CACHE reset generation=%d", self._generation)

    invalidate = reset
