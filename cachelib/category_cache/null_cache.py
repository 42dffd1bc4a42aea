"""
Null category cache implementation for cachelib.category_cache, dood!

This module provides a no-op cache implementing CategoryCacheInterface
that never stores anything. Used when caching is disabled in configuration.
"""

from typing import Iterable, List, Optional, Tuple

from .interface import CategoryCacheInterface
from .types import CacheStatsDict, V, normalizeCategory


class NullCategoryCache(CategoryCacheInterface[V]):
    """No-op category cache, dood!

    Behaves like a cache where every category is disabled: get() always
    misses without touching statistics, set() stores nothing.
    """

    def __init__(self, categories: Iterable[str] = ()):
        """
        Args:
            categories: Category names to report in statistics (optional)
        """
        self._categories = [normalizeCategory(name) for name in categories]

    def get(self, category: str, key: str) -> Tuple[Optional[V], bool]:
        return None, False

    def set(self, category: str, key: str, value: V, ttl: Optional[float] = None) -> None:
        pass

    def invalidate(self, category: str, key: Optional[str] = None) -> int:
        return 0

    def clearAll(self) -> int:
        return 0

    def sweepExpired(self) -> int:
        return 0

    def getStats(self) -> CacheStatsDict:
        return {
            "hits": 0,
            "misses": 0,
            "hitRate": 0.0,
            "invalidations": 0,
            "memoryEvictions": 0,
            "entries": {name: 0 for name in self._categories},
        }

    def listCategories(self) -> List[str]:
        return list(self._categories)

    def isEnabled(self, category: str) -> bool:
        return False
