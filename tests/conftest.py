"""
Pytest configuration and fixtures for portfolio valuation tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic stock/crypto providers with call recording
- An in-memory history cache repository
- A recording notification sink
- Service and repository fixtures
- An API test client wired to the test database
"""

import uuid
from datetime import date, datetime
from typing import Any, Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from orion.main import app
from orion.api import deps
from orion.config.settings import Settings, set_settings, reset_settings
from orion.core.dates import UTC
from orion.core.exceptions import ProviderError
from orion.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from orion.repositories.sqlalchemy import orm_models  # noqa: F401
from orion.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
    SqlAlchemyHistoricalCacheRepository,
)
from orion.domain.models import (
    AssetType,
    Holding,
    OutputSize,
    SeriesKind,
    StockHistoricalCacheEntry,
)
from orion.domain.views import PriceAlert, Quote
from orion.services import (
    HoldingService,
    HoldingCreate,
    HistoricalCacheService,
    MarketDataService,
    MetricsService,
    ValuationService,
    PriceAlertService,
)


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    """Create a localized datetime in UTC."""
    return UTC.localize(datetime(year, month, day, hour, minute))


def to_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


HOUR_MS = 60 * 60 * 1000


@pytest.fixture
def fixed_today() -> date:
    """Fixed 'today' for deterministic calendars."""
    return date(2024, 1, 4)


@pytest.fixture
def fixed_now() -> datetime:
    return utc_datetime(2024, 1, 4, 12, 0)


@pytest.fixture
def fixed_millis(fixed_now) -> int:
    return to_millis(fixed_now)


@pytest.fixture
def clock(fixed_millis) -> Callable[[], int]:
    """Clock returning a fixed epoch-milliseconds value."""
    return lambda: fixed_millis


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def holding_repo(test_session) -> SqlAlchemyHoldingRepository:
    """Provide test HoldingRepository."""
    return SqlAlchemyHoldingRepository(test_session)


@pytest.fixture
def watchlist_repo(test_session) -> SqlAlchemyWatchlistRepository:
    """Provide test WatchlistRepository."""
    return SqlAlchemyWatchlistRepository(test_session)


@pytest.fixture
def sql_cache_repo(test_session) -> SqlAlchemyHistoricalCacheRepository:
    """Provide test HistoricalCacheRepository backed by SQLite."""
    return SqlAlchemyHistoricalCacheRepository(test_session)


class InMemoryHistoricalCacheRepository:
    """Dict-backed history cache for unit tests."""

    def __init__(self):
        self.entries: dict[str, StockHistoricalCacheEntry] = {}
        self.puts: list[str] = []

    def get(self, symbol: str) -> Optional[StockHistoricalCacheEntry]:
        return self.entries.get(symbol.upper())

    def put(self, symbol: str, entry: StockHistoricalCacheEntry) -> StockHistoricalCacheEntry:
        self.entries[symbol.upper()] = entry
        self.puts.append(symbol.upper())
        return entry


@pytest.fixture
def cache_repo() -> InMemoryHistoricalCacheRepository:
    """Provide an in-memory HistoricalCacheRepository."""
    return InMemoryHistoricalCacheRepository()


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


def daily_payload(closes: dict[str, float]) -> dict[str, Any]:
    """Build a daily stock payload in provider wire shape."""
    return {
        "Meta Data": {"2. Symbol": "TEST"},
        "Time Series (Daily)": {
            d: {"1. open": "0.0", "4. close": f"{p:.4f}"} for d, p in closes.items()
        },
    }


def monthly_payload(closes: dict[str, float]) -> dict[str, Any]:
    """Build a monthly stock payload in provider wire shape."""
    return {
        "Meta Data": {"2. Symbol": "TEST"},
        "Time Series (Monthly)": {d: {"4. close": f"{p:.4f}"} for d, p in closes.items()},
    }


def crypto_payload(prices: dict[str, float], hour: int = 12) -> dict[str, Any]:
    """Build a market chart payload with one sample per date-key."""
    points = []
    for key, price in sorted(prices.items()):
        d = date.fromisoformat(key)
        points.append([to_millis(utc_datetime(d.year, d.month, d.day, hour)), price])
    return {"prices": points, "market_caps": [], "total_volumes": []}


class DeterministicStockProvider:
    """
    Deterministic stock provider for testing.

    Serves fixed close series and quotes; records every call. Symbols in
    `failing` raise on both history and quote calls.
    """

    FIXED_QUOTES = {
        "AAPL": (200.0, 10.0),
        "GOOGL": (150.0, 3.0),
        "MSFT": (400.0, -6.0),
        "TSLA": (250.0, -1.2),
    }

    def __init__(
        self,
        daily: Optional[dict[str, dict[str, float]]] = None,
        monthly: Optional[dict[str, dict[str, float]]] = None,
        raw: Optional[dict[str, dict[str, Any]]] = None,
        failing: Optional[set[str]] = None,
    ):
        self.daily = daily or {}
        self.monthly = monthly or {}
        self.raw = raw or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, OutputSize, SeriesKind]] = []
        self.quote_calls: list[str] = []

    def get_time_series(
        self,
        symbol: str,
        outputsize: OutputSize,
        kind: SeriesKind = SeriesKind.DAILY,
    ) -> dict[str, Any]:
        self.calls.append((symbol, outputsize, kind))
        if symbol in self.failing:
            raise ConnectionError("Network unavailable")
        if symbol in self.raw:
            return self.raw[symbol]
        if kind == SeriesKind.MONTHLY and symbol in self.monthly:
            return monthly_payload(self.monthly[symbol])
        return daily_payload(self.daily.get(symbol, {}))

    def get_quote(self, symbol: str) -> Quote:
        self.quote_calls.append(symbol)
        if symbol in self.failing:
            raise ConnectionError("Network unavailable")
        if symbol not in self.FIXED_QUOTES:
            raise ProviderError(symbol, "unknown symbol")
        price, change = self.FIXED_QUOTES[symbol]
        return Quote(symbol=symbol, current_price=price, change_pct=change)


class DeterministicCryptoProvider:
    """Deterministic crypto provider for testing."""

    FIXED_QUOTES = {
        "bitcoin": (50000.0, 2.5),
        "ethereum": (3000.0, -7.5),
    }

    def __init__(
        self,
        prices: Optional[dict[str, dict[str, float]]] = None,
        failing: Optional[set[str]] = None,
    ):
        self.prices = prices or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, str, int]] = []
        self.spot_calls: list[list[str]] = []

    def get_market_chart(self, coin_id: str, vs_currency: str, days: int) -> dict[str, Any]:
        self.calls.append((coin_id, vs_currency, days))
        if coin_id in self.failing:
            raise ConnectionError("Network unavailable")
        return crypto_payload(self.prices.get(coin_id, {}))

    def get_spot_prices(self, coin_ids: list[str], vs_currency: str) -> dict[str, Quote]:
        self.spot_calls.append(list(coin_ids))
        if any(c in self.failing for c in coin_ids):
            raise ConnectionError("Network unavailable")
        return {
            c: Quote(symbol=c, current_price=self.FIXED_QUOTES[c][0], change_pct=self.FIXED_QUOTES[c][1])
            for c in coin_ids
            if c in self.FIXED_QUOTES
        }


class RecordingSink:
    """Notification sink that records alerts; delivery result is configurable."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.attempts: list[PriceAlert] = []

    def deliver(self, alert: PriceAlert) -> bool:
        self.attempts.append(alert)
        return self.succeed


@pytest.fixture
def stock_provider() -> DeterministicStockProvider:
    """Provide a stock provider with an AAPL daily series."""
    return DeterministicStockProvider(
        daily={"AAPL": {"2024-01-02": 100.0, "2024-01-04": 110.0}},
    )


@pytest.fixture
def crypto_provider() -> DeterministicCryptoProvider:
    """Provide a crypto provider with a bitcoin series."""
    return DeterministicCryptoProvider(
        prices={"bitcoin": {"2023-12-29": 40000.0, "2024-01-03": 42000.0}},
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def holding_service(holding_repo, watchlist_repo) -> HoldingService:
    """Provide test HoldingService."""
    return HoldingService(holding_repo=holding_repo, watchlist_repo=watchlist_repo)


@pytest.fixture
def cache_service(cache_repo, stock_provider, clock) -> HistoricalCacheService:
    """Provide HistoricalCacheService over the in-memory cache and a fixed clock."""
    return HistoricalCacheService(
        cache_repo=cache_repo,
        provider=stock_provider,
        ttl_seconds=24 * 60 * 60,
        clock=clock,
    )


@pytest.fixture
def valuation_service(holding_repo, cache_service, crypto_provider, clock) -> ValuationService:
    """Provide test ValuationService."""
    return ValuationService(
        holding_repo=holding_repo,
        cache_service=cache_service,
        crypto_provider=crypto_provider,
        max_workers=4,
        clock=clock,
    )


@pytest.fixture
def market_data_service(stock_provider, crypto_provider) -> MarketDataService:
    """Provide test MarketDataService with deterministic providers."""
    return MarketDataService(
        stock_provider=stock_provider,
        crypto_provider=crypto_provider,
        cache_ttl_seconds=60,
    )


@pytest.fixture
def metrics_service(holding_repo, market_data_service) -> MetricsService:
    """Provide test MetricsService."""
    return MetricsService(holding_repo=holding_repo, market_data_service=market_data_service)


@pytest.fixture
def alert_service(watchlist_repo, market_data_service, sink) -> PriceAlertService:
    """Provide test PriceAlertService with the default threshold."""
    return PriceAlertService(
        watchlist_repo=watchlist_repo,
        market_data_service=market_data_service,
        sink=sink,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def make_holding(
    symbol: str,
    quantity: float,
    purchase_date: str,
    asset_type: AssetType = AssetType.STOCK,
    purchase_price: float = 0.0,
) -> Holding:
    """Build an unsaved Holding for pure-function tests."""
    return Holding(
        id=str(uuid.uuid4()),
        symbol=symbol,
        asset_type=asset_type,
        quantity=quantity,
        purchase_price=purchase_price,
        purchase_date=purchase_date,
    )


@pytest.fixture
def holding_factory(holding_service) -> Callable[..., Holding]:
    """Factory for persisting test holdings."""

    def _create_holding(
        symbol: str,
        quantity: float,
        purchase_price: float = 100.0,
        purchase_date: str = "2024-01-02",
        asset_type: AssetType = AssetType.STOCK,
    ) -> Holding:
        return holding_service.add_holding(
            HoldingCreate(
                symbol=symbol,
                asset_type=asset_type,
                quantity=quantity,
                purchase_price=purchase_price,
                purchase_date=purchase_date,
            )
        )

    return _create_holding


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_stock_provider() -> DeterministicStockProvider:
    return DeterministicStockProvider(
        daily={"AAPL": {"2024-01-02": 100.0, "2024-01-04": 110.0}},
    )


@pytest.fixture
def api_crypto_provider() -> DeterministicCryptoProvider:
    return DeterministicCryptoProvider(prices={"bitcoin": {"2024-01-03": 42000.0}})


@pytest.fixture
def api_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def client(test_engine, api_stock_provider, api_crypto_provider, api_sink) -> TestClient:
    """Provide FastAPI test client with test database and deterministic providers."""
    set_settings(Settings(database_url="sqlite:///:memory:"))
    reset_database()
    deps.reset_dependencies()

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_stock_provider] = lambda: api_stock_provider
    app.dependency_overrides[deps.get_crypto_provider] = lambda: api_crypto_provider
    app.dependency_overrides[deps.get_notification_sink] = lambda: api_sink
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    deps.reset_dependencies()
    reset_database()
    reset_settings()
