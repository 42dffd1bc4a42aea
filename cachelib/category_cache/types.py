"""
Core type definitions for cachelib.category_cache, dood!

This module contains the entry and category definitions shared by every
category cache implementation, plus the TypedDicts returned by the
statistics methods.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TypedDict, TypeVar

# Type variable for cached payloads - can be any type
V = TypeVar("V")

DEFAULT_FALLBACK_TTL = 300
"""TTL in seconds for enabled categories without their own default TTL"""


def normalizeCategory(name: str) -> str:
    """Category names are case-insensitive, lower case is canonical"""
    return name.strip().lower()


def validateMaxSize(maxSize: Any) -> Optional[int]:
    """Per-category size limit must be None or a non-negative int"""
    if maxSize is None:
        return None
    if isinstance(maxSize, bool) or not isinstance(maxSize, int):
        raise ValueError(f"maxSizePerCategory must be an int, got {maxSize!r}")
    if maxSize < 0:
        raise ValueError(f"maxSizePerCategory must not be negative, got {maxSize}")
    return maxSize


def validateTtl(ttl: Any, what: str = "ttl") -> float:
    """
    Ensure TTL is a finite non-negative number, dood!

    Args:
        ttl: Value to check
        what: Name used in the error message

    Returns:
        float: The TTL as float

    Raises:
        ValueError: If ttl is not a number, is NaN/inf or is negative
    """
    if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
        raise ValueError(f"{what} must be a number, got {type(ttl).__name__}")
    if math.isnan(ttl) or math.isinf(ttl):
        raise ValueError(f"{what} must be finite, got {ttl}")
    if ttl < 0:
        raise ValueError(f"{what} must not be negative, got {ttl}")
    return float(ttl)


@dataclass
class CacheEntry:
    """
    Single cached value with its freshness bookkeeping.

    Attributes:
        value: Opaque payload
        createdAt: Unix timestamp of the last set() for this key
        ttl: Effective time-to-live in seconds
        hitCount: Number of successful reads of this entry
    """

    value: Any
    createdAt: float
    ttl: float
    hitCount: int = 0

    def age(self, now: float) -> float:
        """Seconds passed since the entry was stored"""
        return now - self.createdAt

    def isExpired(self, now: float) -> bool:
        """Entry is live while its age is not greater than its TTL"""
        return self.age(now) > self.ttl


@dataclass
class CategoryConfig:
    """
    Static configuration of one cache category.

    Attributes:
        name: Unique category name (case-insensitive)
        enabled: Disabled categories never store and always miss
        defaultTtl: TTL in seconds used when set() gets no override,
            None means the cache-wide fallback TTL
    """

    name: str
    enabled: bool = True
    defaultTtl: Optional[float] = None

    def __post_init__(self):
        """Validate and normalize configuration values"""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Category name must be a non-empty string")
        self.name = normalizeCategory(self.name)
        if not isinstance(self.enabled, bool):
            raise ValueError(f"enabled of category '{self.name}' must be a bool, got {self.enabled!r}")
        if self.defaultTtl is not None:
            self.defaultTtl = validateTtl(self.defaultTtl, f"defaultTtl of category '{self.name}'")


@dataclass
class CategoryState:
    """Runtime state of a category: its config and current entries"""

    config: CategoryConfig
    entries: Dict[str, CacheEntry] = field(default_factory=dict)


class CacheStatsDict(TypedDict):
    """Snapshot of cache-wide statistics, dood."""

    hits: int
    misses: int
    # Percent of get() calls which were hits, 0.0 if there were no requests
    hitRate: float
    invalidations: int
    # Entries removed by periodic sweep
    memoryEvictions: int
    # Dict[category, number of stored entries]
    entries: Dict[str, int]


class CategoryStatsDict(TypedDict):
    """Diagnostics for a single category, dood."""

    name: str
    enabled: bool
    defaultTtl: float
    entries: int
    # Sum of hitCount over stored entries
    entryHits: int
