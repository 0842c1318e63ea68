"""Read-through cache with named regions and a single evict-all.

Regions:
    by_id             translation id -> Translation
    by_key_locale     (key, locale) -> Translation
    distinct_locales  "all" -> sorted locales
    export            locale, None for every locale -> ExportSnapshot

Every committed write clears all regions. Each eviction bumps a
generation counter; a loader that started before an eviction never
populates the cache afterwards, so no pre-write value survives a write.
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, TypeVar

from infrastructure.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")

BY_ID = "by_id"
BY_KEY_LOCALE = "by_key_locale"
DISTINCT_LOCALES = "distinct_locales"
EXPORT = "export"
REGIONS = (BY_ID, BY_KEY_LOCALE, DISTINCT_LOCALES, EXPORT)


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    evictions: int
    region_sizes: Dict[str, int]


class TranslationCache:
    """Thread-safe, bounded, region-based read-through cache.

    The lock is never held while a loader runs, so slow loads do not block
    other readers or evictions.

    Args:
        max_entries: Maximum entries per region; the oldest entry is dropped
            when a region is full
    """

    def __init__(self, max_entries: int = 10000):
        self.max_entries = max_entries
        self._lock = threading.Lock()
        self._regions: Dict[str, "OrderedDict[Hashable, Any]"] = {
            name: OrderedDict() for name in REGIONS
        }
        self._generation = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get_or_load(self, region: str, key: Hashable, loader: Callable[[], T]) -> T:
        """Return the cached value or load, cache and return it.

        Loader exceptions propagate and nothing is cached.

        Raises:
            KeyError: ``region`` is not a known region
        """
        with self._lock:
            entries = self._regions[region]
            if key in entries:
                self._hits += 1
                return entries[key]
            self._misses += 1
            generation = self._generation

        value = loader()

        with self._lock:
            if generation != self._generation:
                logger.debug("cache_load_discarded", region=region)
                return value
            entries = self._regions[region]
            entries[key] = value
            while len(entries) > self.max_entries:
                entries.popitem(last=False)
        return value

    def evict_all(self) -> None:
        """Clear every region in one critical section."""
        with self._lock:
            for entries in self._regions.values():
                entries.clear()
            self._generation += 1
            self._evictions += 1
            generation = self._generation
        logger.debug("cache_evicted", generation=generation)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                region_sizes={name: len(e) for name, e in self._regions.items()},
            )
