"""
Pytest configuration and common fixtures for Nexus Cache tests.

All fixtures follow camelCase naming convention.
"""

import pytest

from cachelib.category_cache import CategoryCache, CategoryConfig
from nexus.services.cache import CacheService
from tests.utils import FakeClock

# ============================================================================
# Clock Fixtures
# ============================================================================


@pytest.fixture
def fakeClock() -> FakeClock:
    """
    Provide manually advanced clock.

    Returns:
        FakeClock: Clock starting at a fixed timestamp
    """
    return FakeClock()


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def categoryCache(fakeClock: FakeClock) -> CategoryCache:
    """
    Create CategoryCache with a few categories driven by fakeClock.

    Categories: items (30s), search (60s), pve (600s), disabled (off).
    """
    return CategoryCache(
        [
            CategoryConfig("items", defaultTtl=30),
            CategoryConfig("search", defaultTtl=60),
            CategoryConfig("pve", defaultTtl=600),
            CategoryConfig("disabled", enabled=False, defaultTtl=60),
        ],
        clock=fakeClock,
    )


@pytest.fixture
def cacheService(fakeClock: FakeClock) -> CacheService:
    """
    Create CacheService with default categories driven by fakeClock.

    Returns:
        CacheService: Service with reference category table
    """
    return CacheService({}, clock=fakeClock)
