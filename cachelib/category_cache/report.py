"""
Human-readable cache statistics report.
"""

from typing import List

from .types import CacheStatsDict


def formatHitRate(hitRate: float) -> str:
    """Format hit rate percent with one decimal, e.g. '75.0%'"""
    return f"{hitRate:.1f}%"


def formatStats(stats: CacheStatsDict) -> List[str]:
    """
    Render statistics snapshot as list of report lines, dood!

    Args:
        stats: Snapshot returned by getStats()

    Returns:
        List[str]: Report lines, categories sorted by name
    """
    lines = [
        "===== Cache Statistics =====",
        f"Hit Rate: {formatHitRate(stats['hitRate'])} ({stats['hits']} hits, {stats['misses']} misses)",
        f"Invalidations: {stats['invalidations']} | Memory Evictions: {stats['memoryEvictions']}",
        "Cached Entries:",
    ]
    for category, count in sorted(stats["entries"].items()):
        lines.append(f"  {category}: {count}")
    return lines
