"""SQLAlchemy implementations of HoldingRepository and WatchlistRepository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from orion.domain.models import Holding, WatchlistItem
from orion.repositories.sqlalchemy.orm_models import HoldingORM, WatchlistItemORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding at the end of the list."""
        next_position = (self._db.query(func.max(HoldingORM.position)).scalar() or 0) + 1
        orm_holding = HoldingORM(
            id=holding.id,
            symbol=holding.symbol,
            asset_type=holding.asset_type,
            quantity=holding.quantity,
            purchase_price=holding.purchase_price,
            purchase_date=holding.purchase_date,
            notes=holding.notes,
            created_at=holding.created_at,
            position=next_position,
        )
        self._db.add(orm_holding)
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._to_domain(orm_holding)

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID."""
        orm_holding = self._db.query(HoldingORM).filter(HoldingORM.id == holding_id).first()
        return self._to_domain(orm_holding) if orm_holding else None

    def list_all(self) -> list[Holding]:
        """List all holdings in insertion order."""
        orm_holdings = self._db.query(HoldingORM).order_by(HoldingORM.position).all()
        return [self._to_domain(h) for h in orm_holdings]

    def update(self, holding: Holding) -> Holding:
        """Update an existing holding."""
        orm_holding = self._db.query(HoldingORM).filter(HoldingORM.id == holding.id).first()
        if orm_holding:
            orm_holding.symbol = holding.symbol
            orm_holding.asset_type = holding.asset_type
            orm_holding.quantity = holding.quantity
            orm_holding.purchase_price = holding.purchase_price
            orm_holding.purchase_date = holding.purchase_date
            orm_holding.notes = holding.notes
            self._db.commit()
            self._db.refresh(orm_holding)
            return self._to_domain(orm_holding)
        raise ValueError(f"Holding not found: {holding.id}")

    def delete(self, holding_id: str) -> None:
        """Delete a holding."""
        self._db.query(HoldingORM).filter(HoldingORM.id == holding_id).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            id=orm.id,
            symbol=orm.symbol,
            asset_type=orm.asset_type,
            quantity=orm.quantity,
            purchase_price=orm.purchase_price,
            purchase_date=orm.purchase_date,
            notes=orm.notes,
            created_at=orm.created_at,
        )


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, item: WatchlistItem) -> WatchlistItem:
        next_position = (
            self._db.query(func.max(WatchlistItemORM.position)).scalar() or 0
        ) + 1
        orm_item = WatchlistItemORM(
            id=item.id,
            symbol=item.symbol,
            asset_type=item.asset_type,
            name=item.name,
            created_at=item.created_at,
            position=next_position,
        )
        self._db.add(orm_item)
        self._db.commit()
        self._db.refresh(orm_item)
        return self._to_domain(orm_item)

    def get_by_id(self, item_id: str) -> Optional[WatchlistItem]:
        orm_item = self._db.query(WatchlistItemORM).filter(WatchlistItemORM.id == item_id).first()
        return self._to_domain(orm_item) if orm_item else None

    def get_by_symbol(self, symbol: str) -> Optional[WatchlistItem]:
        orm_item = (
            self._db.query(WatchlistItemORM)
            .filter(WatchlistItemORM.symbol == symbol)
            .first()
        )
        return self._to_domain(orm_item) if orm_item else None

    def list_all(self) -> list[WatchlistItem]:
        orm_items = self._db.query(WatchlistItemORM).order_by(WatchlistItemORM.position).all()
        return [self._to_domain(i) for i in orm_items]

    def delete(self, item_id: str) -> None:
        self._db.query(WatchlistItemORM).filter(WatchlistItemORM.id == item_id).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: WatchlistItemORM) -> WatchlistItem:
        return WatchlistItem(
            id=orm.id,
            symbol=orm.symbol,
            asset_type=orm.asset_type,
            name=orm.name,
            created_at=orm.created_at,
        )
