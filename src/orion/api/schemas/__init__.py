"""Pydantic schemas for API request/response."""

from orion.api.schemas.holding import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    HoldingListResponse,
    WatchlistItemCreateRequest,
    WatchlistItemResponse,
)
from orion.api.schemas.portfolio import (
    HoldingWithPriceResponse,
    PortfolioMetricsResponse,
    PortfolioHoldingsResponse,
    ValuationPointResponse,
    HistoricalValuationResponse,
    PriceAlertResponse,
    AlertCheckResponse,
)

__all__ = [
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "HoldingResponse",
    "HoldingListResponse",
    "WatchlistItemCreateRequest",
    "WatchlistItemResponse",
    "HoldingWithPriceResponse",
    "PortfolioMetricsResponse",
    "PortfolioHoldingsResponse",
    "ValuationPointResponse",
    "HistoricalValuationResponse",
    "PriceAlertResponse",
    "AlertCheckResponse",
]
