"""
Periodic sweeper for cachelib.category_cache, dood!

This module provides CacheSweeper, an asyncio background task which removes
expired entries from a category cache on a fixed interval, independent of
read traffic.
"""

import asyncio
import logging
import math
from typing import Optional

from .interface import CategoryCacheInterface

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 60.0


class CacheSweeper:
    """
    Periodic background removal of expired cache entries.

    Runs cache.sweepExpired() every `interval` seconds in an asyncio task,
    independent of get() traffic. Each sweep runs synchronously inside the
    event loop, so it never interleaves with other cache calls made from
    the same loop.

    Example:
        >>> sweeper = CacheSweeper(cache, interval=60)
        >>> await sweeper.start()
        >>> ...
        >>> await sweeper.stop()
    """

    def __init__(self, cache: CategoryCacheInterface, interval: float = DEFAULT_SWEEP_INTERVAL):
        """
        Args:
            cache: Cache to sweep
            interval: Seconds between sweeps (default: 60)

        Raises:
            ValueError: If interval is not a positive finite number
        """
        if isinstance(interval, bool) or not isinstance(interval, (int, float)):
            raise ValueError("Sweep interval must be a number")
        if math.isnan(interval) or math.isinf(interval) or interval <= 0:
            raise ValueError(f"Sweep interval must be positive, got {interval}")

        self._cache = cache
        self._interval = float(interval)
        self._task: Optional[asyncio.Task] = None
        self._sweepsCount = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def sweepsCount(self) -> int:
        """Number of completed sweeps"""
        return self._sweepsCount

    def isRunning(self) -> bool:
        return self._task is not None and not self._task.done()

    def runOnce(self) -> int:
        """
        Sweep the cache right now.

        Returns:
            int: Number of removed entries
        """
        removed = self._cache.sweepExpired()
        self._sweepsCount += 1
        if removed:
            logger.info(f"Cache sweep removed {removed} expired entries, dood!")
        return removed

    async def start(self) -> None:
        """Start periodic sweeping in current event loop"""
        if self.isRunning():
            logger.warning("CacheSweeper already running")
            return

        self._task = asyncio.create_task(self._sweepLoop())
        logger.info(f"CacheSweeper started with {self._interval}s interval, dood!")

    async def stop(self) -> None:
        """Stop periodic sweeping and wait for the task to finish"""
        if self._task is None:
            return

        task = self._task
        self._task = None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("CacheSweeper stopped, dood!")

    async def _sweepLoop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.runOnce()
            except Exception as e:
                logger.error(f"Error in cache sweep: {e}")
                logger.exception(e)
