"""
Cache models: categories, data change events and invalidation rules
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, Optional, Tuple


class CacheCategory(StrEnum):
    """Predefined cache categories"""

    CHARACTERS = "characters"
    ITEMS = "items"
    PVE = "pve"
    COLLECTIONS = "collections"
    SEARCH = "search"
    PROFESSIONS = "professions"
    REPUTATIONS = "reputations"


DEFAULT_CATEGORY_TTLS: Dict[CacheCategory, int] = {
    CacheCategory.CHARACTERS: 300,  # changes infrequently
    CacheCategory.ITEMS: 30,  # changes often during bank operations
    CacheCategory.PVE: 600,  # changes weekly
    CacheCategory.COLLECTIONS: 1800,  # changes rarely
    CacheCategory.SEARCH: 60,  # user-driven
    CacheCategory.PROFESSIONS: 3600,  # changes only when trained
    CacheCategory.REPUTATIONS: 300,
}

CHARACTERS_LIST_KEY = "list"
"""Key of the cached character list in CHARACTERS category"""


class CacheEvent(StrEnum):
    """Data change notifications from producers"""

    CHARACTER_UPDATED = "characterUpdated"
    ITEMS_UPDATED = "itemsUpdated"
    PVE_UPDATED = "pveUpdated"
    COLLECTIONS_UPDATED = "collectionsUpdated"
    PROFESSIONS_UPDATED = "professionsUpdated"
    REPUTATIONS_UPDATED = "reputationsUpdated"


@dataclass(frozen=True)
class InvalidationRule:
    """What to invalidate when an event arrives.

    Attributes:
        category: Category to invalidate
        key: Fixed key to invalidate, ignores event key
        useEventKey: Invalidate the key passed with the event,
            whole category if event has no key
    """

    category: CacheCategory
    key: Optional[str] = None
    useEventKey: bool = False

    def resolveKey(self, eventKey: Optional[str]) -> Optional[str]:
        """Get key to invalidate, None means whole category"""
        if self.key is not None:
            return self.key
        if self.useEventKey:
            return eventKey
        return None


INVALIDATION_RULES: Dict[CacheEvent, Tuple[InvalidationRule, ...]] = {
    CacheEvent.CHARACTER_UPDATED: (InvalidationRule(CacheCategory.CHARACTERS, key=CHARACTERS_LIST_KEY),),
    # Search results are built from items, so they go stale together
    CacheEvent.ITEMS_UPDATED: (
        InvalidationRule(CacheCategory.ITEMS),
        InvalidationRule(CacheCategory.SEARCH),
    ),
    CacheEvent.PVE_UPDATED: (InvalidationRule(CacheCategory.PVE, useEventKey=True),),
    CacheEvent.COLLECTIONS_UPDATED: (InvalidationRule(CacheCategory.COLLECTIONS, useEventKey=True),),
    CacheEvent.PROFESSIONS_UPDATED: (InvalidationRule(CacheCategory.PROFESSIONS, useEventKey=True),),
    CacheEvent.REPUTATIONS_UPDATED: (InvalidationRule(CacheCategory.REPUTATIONS, useEventKey=True),),
}
