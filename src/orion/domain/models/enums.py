"""Enumerations for domain models."""

from enum import Enum


class AssetType(str, Enum):
    """Kinds of assets a holding or watchlist item can track."""

    STOCK = "stock"
    CRYPTO = "crypto"


class HistoricalRange(str, Enum):
    """Selectable chart ranges."""

    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"
    YEAR = "1y"


class OutputSize(str, Enum):
    """Stock history payload size requested from the provider."""

    COMPACT = "compact"  # roughly the last 100 trading days
    FULL = "full"


class SeriesKind(str, Enum):
    """Granularity of a stock history payload."""

    DAILY = "daily"
    MONTHLY = "monthly"


class AlertDirection(str, Enum):
    """Direction of a significant price move."""

    UP = "up"
    DOWN = "down"
