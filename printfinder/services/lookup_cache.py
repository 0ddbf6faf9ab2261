"""
Lookup cache.

Remembers which printing a name resolved to so repeated conversions of
overlapping lists skip the catalog. Keys are (lowercased name, sort order):
the same name resolves to different printings under "oldest" and "newest".

Only matches are stored. Misses are always retried so a refreshed catalog is
picked up without clearing the cache.
"""

from collections import OrderedDict
from dataclasses import dataclass

from printfinder.models.card_request import ParsedRequest, SortOrder
from printfinder.models.printing import PrintingRecord

CacheKey = tuple[str, SortOrder]


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Snapshot of cache counters."""

    hits: int
    misses: int
    size: int


class LookupCache:
    """
    In-memory (name, sort order) -> PrintingRecord memo.

    Entries are keyed by `ParsedRequest.cache_key`, so "Island" and "island"
    share one slot.

    With `max_entries` set, the least recently used entry is evicted once
    the cache is full.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._entries: OrderedDict[CacheKey, PrintingRecord] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, request: ParsedRequest, sort_order: SortOrder) -> PrintingRecord | None:
        """Return the cached printing, counting a hit or a miss."""
        key = request.cache_key(sort_order)
        printing = self._entries.get(key)
        if printing is None:
            self._misses += 1
            return None

        self._entries.move_to_end(key)
        self._hits += 1
        return printing

    def put(self, request: ParsedRequest, sort_order: SortOrder, printing: PrintingRecord) -> None:
        key = request.cache_key(sort_order)
        self._entries[key] = printing
        self._entries.move_to_end(key)

        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
