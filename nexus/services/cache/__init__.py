"""
Cache module: Centralized category cache service for Nexus Cache
"""

from .models import (
    CHARACTERS_LIST_KEY,
    DEFAULT_CATEGORY_TTLS,
    INVALIDATION_RULES,
    CacheCategory,
    CacheEvent,
    InvalidationRule,
)
from .service import CacheService, buildCategoryConfigs, normalizeKey
from .types import CacheServiceConfig, CategorySettingsDict

__all__ = [
    # Service
    "CacheService",
    "buildCategoryConfigs",
    "normalizeKey",
    # Models
    "CacheCategory",
    "CacheEvent",
    "InvalidationRule",
    "CHARACTERS_LIST_KEY",
    "DEFAULT_CATEGORY_TTLS",
    "INVALIDATION_RULES",
    # Types
    "CacheServiceConfig",
    "CategorySettingsDict",
]
