"""Cache repository protocol for persisted stock history."""

from typing import Protocol, Optional

from orion.domain.models import StockHistoricalCacheEntry


class HistoricalCacheRepository(Protocol):
    """
    Interface for the per-symbol stock history cache.

    Writes overwrite by symbol; symbols are upper-case.
    """

    def get(self, symbol: str) -> Optional[StockHistoricalCacheEntry]:
        """Get the cache entry for a symbol."""
        ...

    def put(self, symbol: str, entry: StockHistoricalCacheEntry) -> StockHistoricalCacheEntry:
        """Insert or replace the cache entry for a symbol."""
        ...
