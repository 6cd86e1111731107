"""
Tests for RuleCache: TTL, single-flight refresh, reset, failure propagation.
Run from repo root: python -m pytest tests/test_rule_cache.py -v
"""
import asyncio
import threading
import time

import pytest


def _rules(*patterns):
    from halal_engine.rulings import RulingRule
    return [
        RulingRule.from_dict({"compound_pattern": p, "match_type": "word_boundary", "ruling_default": "haram"})
        for p in patterns
    ]


class CountingStore:
    """Store double: counts reads, optionally slow, optionally failing."""

    name = "counting"

    def __init__(self, rules, delay=0.0, fail_times=0, error=None):
        self.rules = rules
        self.delay = delay
        self.fail_times = fail_times
        self.error = error
        self.calls = 0
        self._lock = threading.Lock()

    def list_rules(self, active_only=True):
        with self._lock:
            self.calls += 1
            call = self.calls
        if self.delay:
            time.sleep(self.delay)
        if call <= self.fail_times:
            raise self.error
        return [r for r in self.rules if r.is_active or not active_only]


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_concurrent_misses_share_one_refresh():
    """Ten concurrent get() calls on a cold cache trigger exactly one store read."""
    from halal_engine.rulings import RuleCache
    store = CountingStore(_rules("porc", "vin"), delay=0.05)
    cache = RuleCache(store, ttl_seconds=60)

    async def run():
        return await asyncio.gather(*(cache.get() for _ in range(10)))

    results = asyncio.run(run())
    assert store.calls == 1
    assert cache.refresh_count == 1
    assert all(len(r) == 2 for r in results)
    assert all(r is results[0] for r in results)


def test_ttl_expiry_with_fake_clock():
    from halal_engine.rulings import RuleCache
    clock = FakeClock()
    store = CountingStore(_rules("porc"))
    cache = RuleCache(store, ttl_seconds=3600, clock=clock)

    asyncio.run(cache.get())
    assert cache.is_fresh
    clock.now += 3599
    asyncio.run(cache.get())
    assert store.calls == 1
    clock.now += 2
    assert cache.is_fresh is False
    asyncio.run(cache.get())
    assert store.calls == 2


def test_default_ttl_from_config():
    from halal_engine import config
    from halal_engine.rulings import RuleCache
    clock = FakeClock()
    store = CountingStore(_rules("porc"))
    cache = RuleCache(store, clock=clock)
    asyncio.run(cache.get())
    clock.now += config.RULINGS_CACHE_TTL - 1
    assert cache.is_fresh
    clock.now += 1
    assert cache.is_fresh is False


def test_reset_forces_reload():
    """After reset() the next get() sees rule changes made in the store."""
    from halal_engine.rulings import RuleCache
    store = CountingStore(_rules("porc"))
    cache = RuleCache(store, ttl_seconds=3600)
    first = asyncio.run(cache.get())
    store.rules = _rules("porc", "lard")
    assert asyncio.run(cache.get()) is first
    cache.reset()
    second = asyncio.run(cache.get())
    assert [r.compound_pattern for r in second] == ["porc", "lard"]
    assert store.calls == 2


def test_reset_during_refresh_does_not_cache_stale_result():
    from halal_engine.rulings import RuleCache
    store = CountingStore(_rules("porc"), delay=0.05)
    cache = RuleCache(store, ttl_seconds=3600)

    async def run():
        task = asyncio.ensure_future(cache.get())
        await asyncio.sleep(0.01)
        cache.reset()
        await task

    asyncio.run(run())
    assert cache.is_fresh is False


def test_inactive_rules_never_cached():
    from halal_engine.rulings import RuleCache, RulingRule
    inactive = RulingRule.from_dict({
        "compound_pattern": "lard", "match_type": "word_boundary",
        "ruling_default": "haram", "is_active": False,
    })

    class LeakyStore(CountingStore):
        def list_rules(self, active_only=True):
            return list(self.rules)

    cache = RuleCache(LeakyStore(_rules("porc") + [inactive]), ttl_seconds=60)
    rules = asyncio.run(cache.get())
    assert [r.compound_pattern for r in rules] == ["porc"]


def test_store_failure_propagates_then_retry():
    """A failed refresh reaches every waiter; the next get() retries."""
    from halal_engine.rulings import RuleCache, RulingStoreError
    store = CountingStore(_rules("porc"), delay=0.02, fail_times=1, error=RulingStoreError("db down"))
    cache = RuleCache(store, ttl_seconds=60)

    async def run():
        return await asyncio.gather(*(cache.get() for _ in range(3)), return_exceptions=True)

    outcomes = asyncio.run(run())
    assert all(isinstance(o, RulingStoreError) for o in outcomes)
    assert store.calls == 1
    assert cache.is_fresh is False

    rules = asyncio.run(cache.get())
    assert len(rules) == 1
    assert store.calls == 2


def test_validation_error_propagates():
    """An override cycle in the store is rejected at load time."""
    from halal_engine.rulings import RuleCache, RulingRule, RulingValidationError
    rules = [
        RulingRule.from_dict({"compound_pattern": "a", "match_type": "contains",
                              "ruling_default": "halal", "overrides_keyword": "b"}),
        RulingRule.from_dict({"compound_pattern": "b", "match_type": "contains",
                              "ruling_default": "halal", "overrides_keyword": "a"}),
    ]
    cache = RuleCache(CountingStore(rules), ttl_seconds=60)
    with pytest.raises(RulingValidationError):
        asyncio.run(cache.get())
    assert cache.is_fresh is False
