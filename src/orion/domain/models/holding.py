"""Holding and WatchlistItem domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from orion.core.dates import purchase_date_key
from orion.domain.models.enums import AssetType


def normalize_symbol(symbol: str, asset_type: AssetType) -> str:
    """Stocks are keyed upper-case, crypto coin ids lower-case."""
    symbol = symbol.strip()
    return symbol.upper() if asset_type == AssetType.STOCK else symbol.lower()


@dataclass
class Holding:
    """
    A quantity of a specific asset owned by the user.

    - symbol: "AAPL" for stocks, a coin id such as "bitcoin" for crypto
    - purchase_price: USD per unit
    - purchase_date: ISO date string (time component, if any, is ignored)
    """

    id: str
    symbol: str
    asset_type: AssetType
    quantity: float
    purchase_price: float
    purchase_date: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)

    @property
    def lookup_symbol(self) -> str:
        """Symbol as used to key price series and quotes."""
        return normalize_symbol(self.symbol, self.asset_type)

    @property
    def purchase_date_key(self) -> str:
        """Purchase date truncated to a date-key."""
        return purchase_date_key(self.purchase_date)

    @property
    def cost_basis(self) -> float:
        return self.quantity * self.purchase_price


@dataclass
class WatchlistItem:
    """Tracked asset without a position; used for alerting and display only."""

    id: str
    symbol: str
    asset_type: AssetType
    name: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)

    @property
    def lookup_symbol(self) -> str:
        return normalize_symbol(self.symbol, self.asset_type)
