"""Repository layer - data access abstractions and implementations."""

from orion.repositories.protocols import (
    HoldingRepository,
    WatchlistRepository,
    HistoricalCacheRepository,
)

__all__ = [
    "HoldingRepository",
    "WatchlistRepository",
    "HistoricalCacheRepository",
]
