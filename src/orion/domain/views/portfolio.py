"""View models for point-in-time portfolio outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from orion.domain.models import Holding, WatchlistItem, AssetType, AlertDirection


@dataclass
class Quote:
    """Live price for a stock symbol or crypto coin id."""

    symbol: str
    current_price: float
    change_pct: Optional[float] = None  # 24h / day-over-day change
    as_of: Optional[datetime] = None


@dataclass
class HoldingWithPrice:
    """Holding enriched with its current price and P/L."""

    holding: Holding
    current_price: float
    current_value: float
    pl_usd: float
    pl_pct: float
    has_live_price: bool = True

    @property
    def asset_type(self) -> AssetType:
        return self.holding.asset_type

    @property
    def symbol(self) -> str:
        return self.holding.symbol


@dataclass
class WatchlistItemWithPrice:
    """Watchlist item enriched with its live quote."""

    item: WatchlistItem
    current_price: float
    change_pct: float
    name: Optional[str] = None

    @property
    def symbol(self) -> str:
        return self.item.symbol

    @property
    def asset_type(self) -> AssetType:
        return self.item.asset_type


@dataclass
class PortfolioMetrics:
    """Aggregate point-in-time portfolio figures."""

    total_value: float = 0.0
    total_cost_basis: float = 0.0
    total_pl: float = 0.0
    total_pl_pct: float = 0.0
    stock_value: float = 0.0
    crypto_value: float = 0.0
    stock_pct: float = 0.0
    crypto_pct: float = 0.0


@dataclass
class PriceAlert:
    """A watchlist move large enough to notify about."""

    symbol: str
    name: str
    change_pct: float
    current_price: float
    direction: AlertDirection
    asset_type: AssetType


@dataclass
class AlertCheckResult:
    """Outcome of one alert pass."""

    alerts: list[PriceAlert] = field(default_factory=list)
    sent_count: int = 0
