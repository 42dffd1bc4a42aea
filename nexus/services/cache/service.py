"""
Cache service: application-wide category cache with event-driven invalidation
"""

import logging
import time
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from cachelib.category_cache import (
    DEFAULT_FALLBACK_TTL,
    DEFAULT_SWEEP_INTERVAL,
    CacheStatsDict,
    CacheSweeper,
    CategoryCache,
    CategoryCacheInterface,
    CategoryConfig,
    NullCategoryCache,
    formatStats,
    normalizeCategory,
    validateMaxSize,
)
from cachelib.utils import toBool, toSeconds

from .models import DEFAULT_CATEGORY_TTLS, INVALIDATION_RULES, CacheCategory, CacheEvent
from .types import CacheServiceConfig, CategorySettingsDict

if TYPE_CHECKING:
    from nexus.config.manager import ConfigManager

logger = logging.getLogger(__name__)

Loader = Callable[[], Any]
AsyncLoader = Callable[[], Awaitable[Any]]


def buildCategoryConfigs(overrides: Mapping[str, CategorySettingsDict]) -> List[CategoryConfig]:
    """
    Build category table from built-in defaults and configured overrides.

    Args:
        overrides: Category name (any case) -> settings. Unknown names
            add new categories, without `ttl` they use the fallback TTL.

    Returns:
        List[CategoryConfig]: Defaults first, then added categories

    Raises:
        ValueError: On invalid settings
    """
    if not isinstance(overrides, Mapping):
        raise ValueError(f"Cache categories must be a table, got {type(overrides).__name__}")

    configs: Dict[str, CategoryConfig] = {
        str(category): CategoryConfig(str(category), enabled=True, defaultTtl=ttl)
        for category, ttl in DEFAULT_CATEGORY_TTLS.items()
    }

    for name, settings in overrides.items():
        if not isinstance(settings, Mapping):
            raise ValueError(f"Settings of cache category '{name}' must be a table, got {type(settings).__name__}")

        categoryName = normalizeCategory(name)
        current = configs.get(categoryName)
        if "enabled" in settings:
            enabled = toBool(settings["enabled"])
        else:
            enabled = current.enabled if current else True
        if "ttl" in settings:
            defaultTtl: Optional[float] = toSeconds(settings["ttl"])
        else:
            defaultTtl = current.defaultTtl if current else None

        configs[categoryName] = CategoryConfig(categoryName, enabled=enabled, defaultTtl=defaultTtl)

    return list(configs.values())


def normalizeKey(category: str, key: str) -> str:
    """Search queries are case-insensitive, other keys are used as is"""
    if normalizeCategory(category) == CacheCategory.SEARCH:
        return key.lower()
    return key


class CacheService:
    """
    Category cache shared by all data-access code of the application.

    Consumers call get() and on a miss compute the value themselves and
    call set() (or use getOrLoad()). Producers call invalidate() or
    handleEvent() when underlying data changes.
    Keys of the search category are case-insensitive.

    The service is a plain object: create it once at startup and pass it
    to whoever needs it.

    Usage:
        service = CacheService(configManager.getCacheConfig())
        await service.startSweeper()

        characters = service.getOrLoad("characters", "list", loadCharacters)
        service.handleEvent(CacheEvent.ITEMS_UPDATED)

        await service.stopSweeper()
    """

    def __init__(self, config: Optional[CacheServiceConfig] = None, clock: Callable[[], float] = time.time):
        """
        Initialize cache and sweeper from configuration.

        Args:
            config: [cache] configuration section, defaults are used if None
            clock: Function returning current Unix time, injectable for tests

        Raises:
            ValueError: On invalid configuration values
        """
        config = config or {}
        self.enabled = toBool(config.get("enabled", True))
        self.categoryConfigs = buildCategoryConfigs(config.get("categories", {}))

        fallbackTtl = toSeconds(config.get("fallback-ttl", DEFAULT_FALLBACK_TTL))
        sweepInterval = toSeconds(config.get("sweep-interval", DEFAULT_SWEEP_INTERVAL))
        maxSizePerCategory = validateMaxSize(config.get("max-size-per-category", None))

        self.cache: CategoryCacheInterface[Any]
        if self.enabled:
            self.cache = CategoryCache[Any](
                self.categoryConfigs,
                fallbackTtl=fallbackTtl,
                maxSizePerCategory=maxSizePerCategory,
                clock=clock,
            )
        else:
            self.cache = NullCategoryCache[Any]([categoryConfig.name for categoryConfig in self.categoryConfigs])
            logger.warning("Caching is disabled by configuration, dood!")

        self.sweeper = CacheSweeper(self.cache, interval=sweepInterval)
        logger.info("CacheService initialized, dood!")

    @classmethod
    def fromConfigManager(cls, configManager: "ConfigManager") -> "CacheService":
        """Create service from loaded configuration"""
        return cls(configManager.getCacheConfig())

    # ## Core operations

    def get(self, category: str, key: str) -> Tuple[Optional[Any], bool]:
        """Get (value, found) for key in category"""
        return self.cache.get(category, normalizeKey(category, key))

    def set(self, category: str, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store value, ignored for unknown or disabled categories"""
        self.cache.set(category, normalizeKey(category, key), value, ttl)

    def invalidate(self, category: str, key: Optional[str] = None) -> int:
        """Drop one key or the whole category, returns number of removed entries"""
        if key is not None:
            key = normalizeKey(category, key)
        return self.cache.invalidate(category, key)

    def clearAll(self) -> int:
        """Drop every entry of every category, statistics are kept"""
        return self.cache.clearAll()

    def getStats(self) -> CacheStatsDict:
        return self.cache.getStats()

    def formatStats(self) -> List[str]:
        """Get statistics report lines"""
        return formatStats(self.getStats())

    # ## Event-driven invalidation

    def handleEvent(self, event: CacheEvent | str, key: Optional[str] = None) -> int:
        """
        Invalidate whatever depends on the changed data, dood!

        Args:
            event: Data change event
            key: Optional key of the changed object (e.g. character key),
                rules which use event key invalidate whole category without it

        Returns:
            int: Number of removed entries

        Raises:
            ValueError: If event is unknown
        """
        event = CacheEvent(event)
        removed = 0
        for rule in INVALIDATION_RULES.get(event, ()):
            removed += self.cache.invalidate(rule.category, rule.resolveKey(key))

        logger.debug(f"Handled {event} (key={key}), {removed} entries invalidated")
        return removed

    # ## Fetch-on-miss helpers

    def getOrLoad(self, category: str, key: str, loader: Loader) -> Any:
        """
        Get cached value or load and cache it, dood!

        Not atomic: concurrent misses of the same key may all call their
        loaders, the last set() wins.
        Search keys are lower-cased, so queries differing only in case
        share one entry.

        Args:
            category: Category name
            key: Key within category
            loader: Called on miss, None result is returned but not cached

        Returns:
            Cached or freshly loaded value
        """
        key = normalizeKey(category, key)
        value, found = self.cache.get(category, key)
        if found:
            return value

        value = loader()
        if value is not None:
            self.cache.set(category, key, value)
        return value

    async def getOrLoadAsync(self, category: str, key: str, loader: AsyncLoader) -> Any:
        """Same as getOrLoad(), but awaits the loader"""
        key = normalizeKey(category, key)
        value, found = self.cache.get(category, key)
        if found:
            return value

        value = await loader()
        if value is not None:
            self.cache.set(category, key, value)
        return value

    def warmup(self, loaders: Mapping[Tuple[str, str], Loader]) -> int:
        """
        Preload frequently used data, dood!

        Args:
            loaders: (category, key) -> loader

        Returns:
            int: Number of keys which got a value
        """
        warmed = 0
        for (category, key), loader in loaders.items():
            try:
                if self.getOrLoad(category, key, loader) is not None:
                    warmed += 1
            except Exception as e:
                logger.error(f"Cache warmup failed for {category}/{key}: {e}")

        logger.info(f"Cache warmup done: {warmed}/{len(loaders)} entries, dood!")
        return warmed

    # ## Sweeper lifecycle

    async def startSweeper(self) -> None:
        """Start periodic removal of expired entries"""
        await self.sweeper.start()

    async def stopSweeper(self) -> None:
        await self.sweeper.stop()
