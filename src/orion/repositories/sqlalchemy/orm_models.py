"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Float,
    Integer,
    BigInteger,
    Text,
    Enum as SqlEnum,
)

from orion.repositories.sqlalchemy.database import Base
from orion.domain.models.enums import AssetType, OutputSize


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"

    id = Column(String(36), primary_key=True)
    symbol = Column(String(64), nullable=False, index=True)
    asset_type = Column(SqlEnum(AssetType), nullable=False)
    quantity = Column(Float, nullable=False)
    purchase_price = Column(Float, nullable=False)
    purchase_date = Column(String(32), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    # Preserves store order across updates
    position = Column(Integer, nullable=False, default=0)


class WatchlistItemORM(Base):
    """SQLAlchemy model for WatchlistItem."""

    __tablename__ = "watchlist_items"

    id = Column(String(36), primary_key=True)
    symbol = Column(String(64), nullable=False, unique=True)
    asset_type = Column(SqlEnum(AssetType), nullable=False)
    name = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    position = Column(Integer, nullable=False, default=0)


class StockHistoryCacheORM(Base):
    """SQLAlchemy model for StockHistoricalCacheEntry (raw payload as JSON)."""

    __tablename__ = "stock_history_cache"

    symbol = Column(String(20), primary_key=True)
    data_json = Column(Text, nullable=False)
    outputsize = Column(SqlEnum(OutputSize), nullable=False)
    fetched_at = Column(BigInteger, nullable=False)  # epoch milliseconds
