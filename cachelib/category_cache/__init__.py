"""
cachelib.category_cache - Category-partitioned TTL cache, dood!

This library provides an in-memory key/value cache split into named
categories, each with its own enabled flag and default TTL. It keeps
process-wide hit/miss/invalidation statistics and removes expired entries
both lazily on read and periodically via CacheSweeper.

Core Components:
- CategoryCacheInterface: Abstract base class for category caches
- CategoryCache: Thread-safe in-memory implementation
- NullCategoryCache: No-op cache for disabled caching
- CacheSweeper: asyncio task sweeping expired entries on an interval
- formatStats: Text report of statistics snapshot

Example Usage:
    >>> from cachelib.category_cache import CacheSweeper, CategoryCache, CategoryConfig
    >>>
    >>> cache = CategoryCache[dict](
    ...     [CategoryConfig("items", defaultTtl=30), CategoryConfig("search", defaultTtl=60)]
    ... )
    >>> cache.set("items", "bag:1", {"count": 12})
    >>> value, found = cache.get("items", "bag:1")
    >>>
    >>> sweeper = CacheSweeper(cache, interval=60)
    >>> await sweeper.start()
"""

from .interface import CategoryCacheInterface
from .null_cache import NullCategoryCache
from .report import formatHitRate, formatStats
from .store import CategoryCache
from .sweeper import DEFAULT_SWEEP_INTERVAL, CacheSweeper
from .types import (
    DEFAULT_FALLBACK_TTL,
    CacheEntry,
    CacheStatsDict,
    CategoryConfig,
    CategoryStatsDict,
    V,
    normalizeCategory,
    validateMaxSize,
    validateTtl,
)

__all__ = [
    # Core types
    "CacheEntry",
    "CategoryConfig",
    "CacheStatsDict",
    "CategoryStatsDict",
    "V",
    "DEFAULT_FALLBACK_TTL",
    "DEFAULT_SWEEP_INTERVAL",
    "normalizeCategory",
    "validateMaxSize",
    "validateTtl",
    # Interfaces
    "CategoryCacheInterface",
    # Implementations
    "CategoryCache",
    "NullCategoryCache",
    # Maintenance and reporting
    "CacheSweeper",
    "formatHitRate",
    "formatStats",
]
