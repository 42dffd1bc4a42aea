"""
Cache service: TypedDict models for cache configuration
"""

from typing import Dict, NotRequired, TypeAlias, TypedDict

# Seconds as number or duration string like "5m", "1h30m"
DurationValue: TypeAlias = int | float | str
# bool or flag string like "false", "on" (e.g. from ${VAR} substitution)
FlagValue: TypeAlias = bool | str


class CategorySettingsDict(TypedDict, total=False):
    """Settings of a single category in [cache.categories.<NAME>], dood."""

    enabled: FlagValue
    ttl: DurationValue


# Keys contain dashes, so the functional syntax is used
CacheServiceConfig = TypedDict(
    "CacheServiceConfig",
    {
        # Whole cache switch, NullCategoryCache is used when false
        "enabled": NotRequired[FlagValue],
        "sweep-interval": NotRequired[DurationValue],
        "fallback-ttl": NotRequired[DurationValue],
        # Nominal limit, reported but not enforced
        "max-size-per-category": NotRequired[int],
        # Category name (any case) -> settings
        "categories": NotRequired[Dict[str, CategorySettingsDict]],
    },
)
