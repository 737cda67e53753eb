"""Holding service for portfolio and watchlist management."""

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Optional

from orion.core.dates import now_utc, purchase_date_key, today_utc
from orion.core.exceptions import ValidationError, NotFoundError
from orion.domain.models import AssetType, Holding, WatchlistItem
from orion.domain.models.holding import normalize_symbol
from orion.repositories.protocols import HoldingRepository, WatchlistRepository

logger = logging.getLogger(__name__)


@dataclass
class HoldingCreate:
    """Input data for adding a holding."""

    symbol: str
    asset_type: AssetType
    quantity: float
    purchase_price: float
    purchase_date: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class HoldingUpdate:
    """Partial update data for editing a holding."""

    quantity: Optional[float] = None
    purchase_price: Optional[float] = None
    purchase_date: Optional[str] = None
    notes: Optional[str] = None


class HoldingService:
    """
    Service for managing holdings and the watchlist.

    Holdings are immutable except through `update_holding`; symbols are stored
    normalized (stocks upper-case, crypto coin ids lower-case).
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        watchlist_repo: WatchlistRepository,
    ):
        self._holding_repo = holding_repo
        self._watchlist_repo = watchlist_repo

    # Holdings

    def add_holding(self, data: HoldingCreate) -> Holding:
        """
        Add a holding to the portfolio.

        Validates quantity > 0, purchase_price >= 0 and a parseable purchase
        date (defaults to today, UTC).
        """
        asset_type = self._validate_asset_type(data.asset_type)
        symbol = self._validate_symbol(data.symbol, asset_type)
        self._validate_quantity(data.quantity)
        self._validate_price(data.purchase_price)
        purchase_date = self._validate_purchase_date(data.purchase_date or today_utc().isoformat())

        holding = Holding(
            id=str(uuid.uuid4()),
            symbol=symbol,
            asset_type=asset_type,
            quantity=float(data.quantity),
            purchase_price=float(data.purchase_price),
            purchase_date=purchase_date,
            notes=data.notes,
            created_at=now_utc(),
        )
        created = self._holding_repo.create(holding)
        logger.info("Added holding %s (%s x %s)", created.id, created.symbol, created.quantity)
        return created

    def get_holding(self, holding_id: str) -> Holding:
        holding = self._holding_repo.get_by_id(holding_id)
        if not holding:
            raise NotFoundError("Holding", holding_id)
        return holding

    def list_holdings(self) -> list[Holding]:
        return self._holding_repo.list_all()

    def update_holding(self, holding_id: str, patch: HoldingUpdate) -> Holding:
        """Apply a partial update to a holding."""
        holding = self.get_holding(holding_id)

        if patch.quantity is not None:
            self._validate_quantity(patch.quantity)
            holding.quantity = float(patch.quantity)
        if patch.purchase_price is not None:
            self._validate_price(patch.purchase_price)
            holding.purchase_price = float(patch.purchase_price)
        if patch.purchase_date is not None:
            holding.purchase_date = self._validate_purchase_date(patch.purchase_date)
        if patch.notes is not None:
            holding.notes = patch.notes

        return self._holding_repo.update(holding)

    def remove_holding(self, holding_id: str) -> None:
        self.get_holding(holding_id)
        self._holding_repo.delete(holding_id)
        logger.info("Removed holding %s", holding_id)

    # Watchlist

    def add_watchlist_item(
        self,
        symbol: str,
        asset_type: AssetType,
        name: Optional[str] = None,
    ) -> WatchlistItem:
        asset_type = self._validate_asset_type(asset_type)
        symbol = self._validate_symbol(symbol, asset_type)
        if self._watchlist_repo.get_by_symbol(symbol):
            raise ValidationError(f"{symbol} is already on the watchlist")

        item = WatchlistItem(
            id=str(uuid.uuid4()),
            symbol=symbol,
            asset_type=asset_type,
            name=name,
            created_at=now_utc(),
        )
        return self._watchlist_repo.create(item)

    def list_watchlist(self) -> list[WatchlistItem]:
        return self._watchlist_repo.list_all()

    def remove_watchlist_item(self, item_id: str) -> None:
        if not self._watchlist_repo.get_by_id(item_id):
            raise NotFoundError("Watchlist item", item_id)
        self._watchlist_repo.delete(item_id)

    # Validation

    @staticmethod
    def _validate_asset_type(asset_type) -> AssetType:
        try:
            return AssetType(asset_type)
        except ValueError:
            raise ValidationError(f"Unknown asset type: {asset_type}")

    @staticmethod
    def _validate_symbol(symbol: Optional[str], asset_type: AssetType) -> str:
        if not symbol or not symbol.strip():
            raise ValidationError("Symbol is required")
        return normalize_symbol(symbol, asset_type)

    @staticmethod
    def _validate_quantity(quantity: float) -> None:
        if quantity is None or not math.isfinite(quantity) or quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

    @staticmethod
    def _validate_price(price: float) -> None:
        if price is None or not math.isfinite(price) or price < 0:
            raise ValidationError("Purchase price cannot be negative")

    @staticmethod
    def _validate_purchase_date(value: str) -> str:
        try:
            purchase_date_key(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid purchase date: {value}")
        return value
