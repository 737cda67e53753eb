"""Domain layer - pure business models with no external dependencies."""

from orion.domain.models import (
    Holding,
    WatchlistItem,
    StockHistoricalCacheEntry,
    AssetType,
    HistoricalRange,
    OutputSize,
    SeriesKind,
    AlertDirection,
)

__all__ = [
    "Holding",
    "WatchlistItem",
    "StockHistoricalCacheEntry",
    "AssetType",
    "HistoricalRange",
    "OutputSize",
    "SeriesKind",
    "AlertDirection",
]
