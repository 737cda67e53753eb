"""SQLAlchemy implementation of HistoricalCacheRepository."""

import json
from typing import Optional

from sqlalchemy.orm import Session

from orion.domain.models import StockHistoricalCacheEntry
from orion.repositories.sqlalchemy.orm_models import StockHistoryCacheORM


class SqlAlchemyHistoricalCacheRepository:
    """SQLAlchemy-backed stock history cache; payloads stored as JSON text."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, symbol: str) -> Optional[StockHistoricalCacheEntry]:
        """Get the cache entry for a symbol."""
        orm_entry = (
            self._db.query(StockHistoryCacheORM)
            .filter(StockHistoryCacheORM.symbol == symbol.upper())
            .first()
        )
        return self._to_domain(orm_entry) if orm_entry else None

    def put(self, symbol: str, entry: StockHistoricalCacheEntry) -> StockHistoricalCacheEntry:
        """Insert or replace the cache entry for a symbol."""
        symbol = symbol.upper()
        orm_entry = (
            self._db.query(StockHistoryCacheORM)
            .filter(StockHistoryCacheORM.symbol == symbol)
            .first()
        )

        if orm_entry:
            orm_entry.data_json = json.dumps(entry.data)
            orm_entry.outputsize = entry.outputsize
            orm_entry.fetched_at = entry.fetched_at
        else:
            orm_entry = StockHistoryCacheORM(
                symbol=symbol,
                data_json=json.dumps(entry.data),
                outputsize=entry.outputsize,
                fetched_at=entry.fetched_at,
            )
            self._db.add(orm_entry)

        self._db.commit()
        self._db.refresh(orm_entry)
        return self._to_domain(orm_entry)

    def list_symbols(self) -> list[str]:
        """List cached symbols."""
        rows = self._db.query(StockHistoryCacheORM.symbol).order_by(StockHistoryCacheORM.symbol).all()
        return [row[0] for row in rows]

    @staticmethod
    def _to_domain(orm: StockHistoryCacheORM) -> StockHistoricalCacheEntry:
        """Convert ORM entry to domain model."""
        return StockHistoricalCacheEntry(
            data=json.loads(orm.data_json),
            outputsize=orm.outputsize,
            fetched_at=orm.fetched_at,
        )
