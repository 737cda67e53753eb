"""Pydantic schemas for portfolio, history and alert endpoints."""

from typing import Optional

from pydantic import BaseModel

from orion.domain.models.enums import AlertDirection, AssetType


class HoldingWithPriceResponse(BaseModel):
    """Response schema for a holding priced at its live quote."""

    id: str
    symbol: str
    asset_type: AssetType
    quantity: float
    purchase_price: float
    purchase_date: str
    current_price: float
    current_value: float
    pl_usd: float
    pl_pct: float
    has_live_price: bool


class PortfolioMetricsResponse(BaseModel):
    """Response schema for aggregate metrics."""

    total_value: float
    total_cost_basis: float
    total_pl: float
    total_pl_pct: float
    stock_value: float
    crypto_value: float
    stock_pct: float
    crypto_pct: float
    is_error: bool = False
    missing_quotes: list[str] = []


class PortfolioHoldingsResponse(BaseModel):
    """Response schema for priced holdings."""

    holdings: list[HoldingWithPriceResponse]
    is_error: bool = False


class ValuationPointResponse(BaseModel):
    date: str
    value: float


class HistoricalValuationResponse(BaseModel):
    """Response schema for the valuation chart series."""

    range: str
    data: list[ValuationPointResponse]
    is_error: bool
    error: Optional[str] = None
    missing_symbols: list[str] = []


class PriceAlertResponse(BaseModel):
    symbol: str
    name: str
    change_pct: float
    current_price: float
    direction: AlertDirection
    asset_type: AssetType


class AlertCheckResponse(BaseModel):
    """Response schema for one alert pass."""

    alerts: list[PriceAlertResponse]
    sent_count: int
    threshold_pct: float
