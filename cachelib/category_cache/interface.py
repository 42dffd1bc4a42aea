"""
Abstract category cache interface for cachelib.category_cache, dood!

This module defines the generic CategoryCacheInterface that all category
cache implementations must follow, so the application can swap a real
store for a no-op one without touching callers.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Tuple

from .types import CacheStatsDict, V


class CategoryCacheInterface(ABC, Generic[V]):
    """
    Generic interface for a category-partitioned TTL cache, dood!

    Values are grouped into categories, each with its own enabled flag and
    default TTL. Keys are unique within a category only.

    Type Parameters:
        V: The cached payload type

    Example:
        >>> cache = CategoryCache([CategoryConfig("items", defaultTtl=30)])
        >>> cache.set("items", "bag:1", {"count": 12})
        >>> value, found = cache.get("items", "bag:1")
        >>> stats = cache.getStats()
    """

    @abstractmethod
    def get(self, category: str, key: str) -> Tuple[Optional[V], bool]:
        """
        Get cached value, dood!

        Args:
            category: Category name
            key: Key within the category

        Returns:
            Tuple[Optional[V], bool]: (value, True) for a live entry,
                (None, False) otherwise
        """
        pass

    @abstractmethod
    def set(self, category: str, key: str, value: V, ttl: Optional[float] = None) -> None:
        """
        Store value, replacing any previous entry for the key, dood!

        Unknown or disabled categories are silently ignored.

        Args:
            category: Category name
            key: Key within the category
            value: Payload to store
            ttl: Optional TTL override in seconds
        """
        pass

    @abstractmethod
    def invalidate(self, category: str, key: Optional[str] = None) -> int:
        """
        Remove one key, or every key of the category if key is None, dood!

        Returns:
            int: Number of removed entries
        """
        pass

    @abstractmethod
    def clearAll(self) -> int:
        """
        Invalidate every category, keeping the statistics.

        Returns:
            int: Number of removed entries
        """
        pass

    @abstractmethod
    def sweepExpired(self) -> int:
        """
        Remove all expired entries regardless of access.

        Returns:
            int: Number of removed entries
        """
        pass

    @abstractmethod
    def getStats(self) -> CacheStatsDict:
        """Get snapshot of cache statistics, dood!"""
        pass

    @abstractmethod
    def listCategories(self) -> List[str]:
        """Get names of all known categories"""
        pass

    @abstractmethod
    def isEnabled(self, category: str) -> bool:
        """Check whether category is known and enabled"""
        pass
