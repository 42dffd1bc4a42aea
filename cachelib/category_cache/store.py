"""
Category cache store: in-memory TTL cache partitioned by category, dood!

Entries expire in two independent ways which share CacheEntry.isExpired():
- lazily, when get() finds an expired entry (counted as a miss)
- periodically, when sweepExpired() is called (counted as memory eviction)
"""

import logging
import time
from dataclasses import replace
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .interface import CategoryCacheInterface
from .types import (
    DEFAULT_FALLBACK_TTL,
    CacheEntry,
    CacheStatsDict,
    CategoryConfig,
    CategoryState,
    CategoryStatsDict,
    V,
    normalizeCategory,
    validateMaxSize,
    validateTtl,
)

logger = logging.getLogger(__name__)


class CategoryCache(CategoryCacheInterface[V]):
    """
    Thread-safe category-partitioned TTL cache with hit/miss accounting.

    Categories are fixed at construction. A single RLock guards all
    category mappings and statistics, so every operation (including the
    read-then-delete of an expired entry in get()) is atomic.

    Example:
        >>> cache = CategoryCache[dict](
        ...     [CategoryConfig("pve", defaultTtl=600), CategoryConfig("search", defaultTtl=60)]
        ... )
        >>> cache.set("pve", "char1", {"bossKills": 5})
        >>> cache.get("pve", "char1")
        ({'bossKills': 5}, True)
        >>> cache.invalidate("pve")
        1
    """

    def __init__(
        self,
        categories: Iterable[CategoryConfig],
        fallbackTtl: float = DEFAULT_FALLBACK_TTL,
        maxSizePerCategory: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize cache with static category table.

        Args:
            categories: Category configurations, names must be unique
            fallbackTtl: TTL for categories without defaultTtl (default: 300)
            maxSizePerCategory: Nominal per-category size limit, reported but not enforced
            clock: Function returning current Unix time, injectable for tests

        Raises:
            ValueError: On duplicate category names, invalid TTLs or size limit
        """
        self._fallbackTtl = validateTtl(fallbackTtl, "fallbackTtl")
        self._maxSizePerCategory = validateMaxSize(maxSizePerCategory)
        self._clock = clock
        self._lock = RLock()

        self._categories: Dict[str, CategoryState] = {}
        for config in categories:
            if config.name in self._categories:
                raise ValueError(f"Category '{config.name}' is configured twice")
            self._categories[config.name] = CategoryState(config=replace(config))

        self._hits = 0
        self._misses = 0
        self._invalidations = 0
        self._memoryEvictions = 0

        logger.info(
            f"CategoryCache initialized with {len(self._categories)} categories "
            f"({', '.join(self._categories)}), fallbackTtl={self._fallbackTtl}s, dood!"
        )

    def _getState(self, category: str) -> Optional[CategoryState]:
        return self._categories.get(normalizeCategory(category))

    def _getEnabledState(self, category: str) -> Optional[CategoryState]:
        """Get category state if category is known and currently enabled"""
        state = self._getState(category)
        if state is None or not state.config.enabled:
            return None
        return state

    def _effectiveTtl(self, config: CategoryConfig, ttl: Optional[float]) -> float:
        if ttl is not None:
            return ttl
        if config.defaultTtl is not None:
            return config.defaultTtl
        return self._fallbackTtl

    def get(self, category: str, key: str) -> Tuple[Optional[V], bool]:
        with self._lock:
            state = self._getEnabledState(category)
            if state is None:
                # Opted-out categories are excluded from accounting
                return None, False

            entry = state.entries.get(key)
            if entry is None:
                self._misses += 1
                logger.debug(f"Cache miss: {state.config.name}/{key}")
                return None, False

            if entry.isExpired(self._clock()):
                del state.entries[key]
                self._misses += 1
                logger.debug(f"Cache entry expired on read: {state.config.name}/{key}")
                return None, False

            entry.hitCount += 1
            self._hits += 1
            logger.debug(f"Cache hit: {state.config.name}/{key}")
            return entry.value, True

    def set(self, category: str, key: str, value: V, ttl: Optional[float] = None) -> None:
        if ttl is not None:
            ttl = validateTtl(ttl)

        with self._lock:
            state = self._getEnabledState(category)
            if state is None:
                return

            effectiveTtl = self._effectiveTtl(state.config, ttl)
            state.entries[key] = CacheEntry(value=value, createdAt=self._clock(), ttl=effectiveTtl)
            logger.debug(f"Cached {state.config.name}/{key} for {effectiveTtl}s")

    def invalidate(self, category: str, key: Optional[str] = None) -> int:
        with self._lock:
            state = self._getState(category)
            if state is None:
                return 0

            if key is not None:
                if state.entries.pop(key, None) is None:
                    return 0
                removed = 1
            else:
                removed = len(state.entries)
                state.entries.clear()

            self._invalidations += removed
            if removed:
                target = key if key is not None else "*"
                logger.debug(f"Invalidated {removed} entries in {state.config.name}/{target}")
            return removed

    def clearAll(self) -> int:
        with self._lock:
            removed = sum(self.invalidate(name) for name in self._categories)
        logger.info(f"Cleared all caches, {removed} entries removed, dood!")
        return removed

    def sweepExpired(self) -> int:
        with self._lock:
            now = self._clock()
            removed = 0
            for state in self._categories.values():
                expiredKeys = [key for key, entry in state.entries.items() if entry.isExpired(now)]
                for key in expiredKeys:
                    del state.entries[key]
                removed += len(expiredKeys)
            self._memoryEvictions += removed

        if removed:
            logger.debug(f"Sweep removed {removed} expired entries")
        return removed

    def getStats(self) -> CacheStatsDict:
        with self._lock:
            totalRequests = self._hits + self._misses
            hitRate = (self._hits / totalRequests * 100) if totalRequests > 0 else 0.0
            return {
                "hits": self._hits,
                "misses": self._misses,
                "hitRate": hitRate,
                "invalidations": self._invalidations,
                "memoryEvictions": self._memoryEvictions,
                "entries": {name: len(state.entries) for name, state in self._categories.items()},
            }

    def getCategoryStats(self, category: str) -> CategoryStatsDict:
        """
        Get diagnostics for a single category, dood!

        Args:
            category: Category name

        Returns:
            CategoryStatsDict: Enabled flag, effective default TTL, number of
                stored entries and the sum of their hit counters

        Raises:
            ValueError: If the category is not configured
        """
        with self._lock:
            state = self._getState(category)
            if state is None:
                raise ValueError(f"Category '{category}' does not exist")

            return {
                "name": state.config.name,
                "enabled": state.config.enabled,
                "defaultTtl": self._effectiveTtl(state.config, None),
                "entries": len(state.entries),
                "entryHits": sum(entry.hitCount for entry in state.entries.values()),
            }

    def listCategories(self) -> List[str]:
        return list(self._categories.keys())

    def isEnabled(self, category: str) -> bool:
        return self._getEnabledState(category) is not None

    def setEnabled(self, category: str, enabled: bool) -> None:
        """
        Toggle category at runtime.

        Stored entries are kept, but get() and set() ignore the category
        while it is disabled.

        Raises:
            ValueError: If the category is not configured
        """
        with self._lock:
            state = self._getState(category)
            if state is None:
                raise ValueError(f"Category '{category}' does not exist")
            if not isinstance(enabled, bool):
                raise ValueError(f"enabled must be a bool, got {enabled!r}")
            state.config.enabled = enabled
        logger.info(f"Category '{state.config.name}' {'enabled' if enabled else 'disabled'}, dood!")

    @property
    def fallbackTtl(self) -> float:
        return self._fallbackTtl

    @property
    def maxSizePerCategory(self) -> Optional[int]:
        """Configured per-category size limit, informational only"""
        return self._maxSizePerCategory
