"""Repository protocol definitions (interfaces)."""

from orion.repositories.protocols.holding_repo import HoldingRepository, WatchlistRepository
from orion.repositories.protocols.cache_repo import HistoricalCacheRepository

__all__ = [
    "HoldingRepository",
    "WatchlistRepository",
    "HistoricalCacheRepository",
]
