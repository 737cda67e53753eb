"""View models for service outputs."""

from orion.domain.views.portfolio import (
    Quote,
    HoldingWithPrice,
    WatchlistItemWithPrice,
    PortfolioMetrics,
    PriceAlert,
    AlertCheckResult,
)
from orion.domain.views.valuation import (
    StockSeriesPayload,
    StockHistoryResult,
    ValuationPoint,
    HistoricalValuation,
)

__all__ = [
    "Quote",
    "HoldingWithPrice",
    "WatchlistItemWithPrice",
    "PortfolioMetrics",
    "PriceAlert",
    "AlertCheckResult",
    "StockSeriesPayload",
    "StockHistoryResult",
    "ValuationPoint",
    "HistoricalValuation",
]
