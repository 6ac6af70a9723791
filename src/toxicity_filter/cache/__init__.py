"""
In-memory result caching.

- lru_cache.py: thread-safe bounded LRUCache and CacheStatistics snapshot
"""

from toxicity_filter.cache.lru_cache import CacheStatistics, LRUCache

__all__ = [
    "CacheStatistics",
    "LRUCache",
]
