"""Service layer - business logic orchestration."""

from orion.services.holding_service import HoldingService, HoldingCreate, HoldingUpdate
from orion.services.historical_cache_service import HistoricalCacheService
from orion.services.market_data_service import MarketDataService
from orion.services.metrics_service import MetricsService, PortfolioSnapshot
from orion.services.valuation_service import ValuationService
from orion.services.alert_service import PriceAlertService

__all__ = [
    "HoldingService",
    "HoldingCreate",
    "HoldingUpdate",
    "HistoricalCacheService",
    "MarketDataService",
    "MetricsService",
    "PortfolioSnapshot",
    "ValuationService",
    "PriceAlertService",
]
