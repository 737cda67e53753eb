"""Domain models package."""

from orion.domain.models.enums import (
    AssetType,
    HistoricalRange,
    OutputSize,
    SeriesKind,
    AlertDirection,
)
from orion.domain.models.holding import Holding, WatchlistItem
from orion.domain.models.cache import StockHistoricalCacheEntry

__all__ = [
    "AssetType",
    "HistoricalRange",
    "OutputSize",
    "SeriesKind",
    "AlertDirection",
    "Holding",
    "WatchlistItem",
    "StockHistoricalCacheEntry",
]
