"""
End-to-end cache flows: consumers reading through the service while
producers publish data change events and the sweeper runs.
"""

import asyncio

import pytest

from cachelib.category_cache import CategoryCache, formatStats
from nexus.services.cache import CacheEvent, CacheService
from tests.utils import CountingLoader, FakeClock


class TestCategoryCacheFlow:
    """Scenarios on a bare CategoryCache."""

    def test_entry_lifecycle(self, categoryCache: CategoryCache, fakeClock: FakeClock):
        categoryCache.set("items", "bag", {"slots": 20})
        categoryCache.set("pve", "Alice-Realm", {"bossKills": 5})

        fakeClock.advance(30)
        assert categoryCache.get("items", "bag") == ({"slots": 20}, True)

        fakeClock.advance(1)
        assert categoryCache.get("items", "bag") == (None, False)
        assert categoryCache.sweepExpired() == 0

        fakeClock.advance(600)
        assert categoryCache.sweepExpired() == 1

        stats = categoryCache.getStats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["memoryEvictions"] == 1
        assert stats["hitRate"] == 50.0
        assert stats["entries"] == {"items": 0, "search": 0, "pve": 0, "disabled": 0}

    def test_disabled_category_is_invisible(self, categoryCache: CategoryCache):
        categoryCache.set("disabled", "k", 1)

        assert categoryCache.get("disabled", "k") == (None, False)
        assert categoryCache.getStats()["misses"] == 0
        assert formatStats(categoryCache.getStats())[-1] == "  search: 0"


class TestCacheServiceFlow:
    """Scenarios on the application service."""

    def test_read_through_with_events(self, cacheService: CacheService, fakeClock: FakeClock):
        itemsLoader = CountingLoader([{"id": 1}])
        searchLoader = CountingLoader([{"id": 1, "name": "Sword"}])

        for _ in range(3):
            cacheService.getOrLoad("items", "bank", itemsLoader)
            cacheService.getOrLoad("search", "sword", searchLoader)

        assert itemsLoader.callCount == 1
        assert searchLoader.callCount == 1

        cacheService.handleEvent(CacheEvent.ITEMS_UPDATED)

        cacheService.getOrLoad("items", "bank", itemsLoader)
        cacheService.getOrLoad("search", "sword", searchLoader)
        assert itemsLoader.callCount == 2
        assert searchLoader.callCount == 2

        stats = cacheService.getStats()
        assert stats["hits"] == 4
        assert stats["misses"] == 4
        assert stats["invalidations"] == 2

    @pytest.mark.asyncio
    async def test_sweeper_with_async_loaders(self, fakeClock: FakeClock):
        service = CacheService({"sweep-interval": 0.01, "categories": {"search": {"ttl": "5s"}}}, clock=fakeClock)
        loader = CountingLoader(["result"])

        await service.getOrLoadAsync("search", "query", loader.asyncCall)
        await service.startSweeper()
        try:
            fakeClock.advance(6)
            for _ in range(100):
                if service.getStats()["memoryEvictions"]:
                    break
                await asyncio.sleep(0.01)
        finally:
            await service.stopSweeper()

        await service.getOrLoadAsync("search", "query", loader.asyncCall)
        assert loader.callCount == 2
        assert service.getStats()["memoryEvictions"] == 1
