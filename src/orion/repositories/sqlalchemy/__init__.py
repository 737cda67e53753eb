"""SQLAlchemy repository implementations."""

from orion.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from orion.repositories.sqlalchemy.holding_repo import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
)
from orion.repositories.sqlalchemy.cache_repo import SqlAlchemyHistoricalCacheRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyWatchlistRepository",
    "SqlAlchemyHistoricalCacheRepository",
]
