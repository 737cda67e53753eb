"""Dependency injection for FastAPI."""

import threading
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from orion.config.settings import get_settings
from orion.providers.notification_sink import LoggingNotificationSink, NotificationSink
from orion.providers.stub_provider import (
    StubStockMarketDataProvider,
    StubCryptoMarketDataProvider,
)
from orion.repositories.sqlalchemy.database import get_db
from orion.repositories.sqlalchemy import (
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
    SqlAlchemyHistoricalCacheRepository,
)
from orion.services import (
    HoldingService,
    HistoricalCacheService,
    MarketDataService,
    MetricsService,
    ValuationService,
    PriceAlertService,
)

# Process-wide state shared across requests
_stock_provider: Optional[StubStockMarketDataProvider] = None
_crypto_provider: Optional[StubCryptoMarketDataProvider] = None
_market_data_service: Optional[MarketDataService] = None
_notification_sink: Optional[NotificationSink] = None
_notified_symbols: set[str] = set()
_alerts_lock = threading.Lock()
_threshold_pct: Optional[float] = None


def get_holding_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingRepository:
    """Provide HoldingRepository instance."""
    return SqlAlchemyHoldingRepository(db)


def get_watchlist_repo(db: Session = Depends(get_db)) -> SqlAlchemyWatchlistRepository:
    """Provide WatchlistRepository instance."""
    return SqlAlchemyWatchlistRepository(db)


def get_cache_repo(db: Session = Depends(get_db)) -> SqlAlchemyHistoricalCacheRepository:
    """Provide HistoricalCacheRepository instance."""
    return SqlAlchemyHistoricalCacheRepository(db)


def get_stock_provider() -> StubStockMarketDataProvider:
    """Provide the stock market data provider (stub for offline operation)."""
    global _stock_provider
    if _stock_provider is None:
        _stock_provider = StubStockMarketDataProvider()
    return _stock_provider


def get_crypto_provider() -> StubCryptoMarketDataProvider:
    """Provide the crypto market data provider (stub for offline operation)."""
    global _crypto_provider
    if _crypto_provider is None:
        _crypto_provider = StubCryptoMarketDataProvider()
    return _crypto_provider


def get_notification_sink() -> NotificationSink:
    global _notification_sink
    if _notification_sink is None:
        _notification_sink = LoggingNotificationSink()
    return _notification_sink


def get_holding_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    watchlist_repo: SqlAlchemyWatchlistRepository = Depends(get_watchlist_repo),
) -> HoldingService:
    """Provide HoldingService instance."""
    return HoldingService(holding_repo=holding_repo, watchlist_repo=watchlist_repo)


def get_market_data_service(
    stock_provider: StubStockMarketDataProvider = Depends(get_stock_provider),
    crypto_provider: StubCryptoMarketDataProvider = Depends(get_crypto_provider),
) -> MarketDataService:
    """Provide the shared MarketDataService (its quote cache outlives requests)."""
    global _market_data_service
    if _market_data_service is None:
        settings = get_settings()
        _market_data_service = MarketDataService(
            stock_provider=stock_provider,
            crypto_provider=crypto_provider,
            cache_ttl_seconds=settings.quote_cache_ttl_seconds,
            vs_currency=settings.vs_currency,
            max_workers=settings.history_fetch_workers,
        )
    return _market_data_service


def get_historical_cache_service(
    cache_repo: SqlAlchemyHistoricalCacheRepository = Depends(get_cache_repo),
    stock_provider: StubStockMarketDataProvider = Depends(get_stock_provider),
) -> HistoricalCacheService:
    """Provide HistoricalCacheService instance."""
    return HistoricalCacheService(
        cache_repo=cache_repo,
        provider=stock_provider,
        ttl_seconds=get_settings().stock_cache_ttl_seconds,
    )


def get_metrics_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> MetricsService:
    """Provide MetricsService instance."""
    return MetricsService(holding_repo=holding_repo, market_data_service=market_data_service)


def get_valuation_service(
    holding_repo: SqlAlchemyHoldingRepository = Depends(get_holding_repo),
    cache_service: HistoricalCacheService = Depends(get_historical_cache_service),
    crypto_provider: StubCryptoMarketDataProvider = Depends(get_crypto_provider),
) -> ValuationService:
    """Provide ValuationService instance."""
    settings = get_settings()
    return ValuationService(
        holding_repo=holding_repo,
        cache_service=cache_service,
        crypto_provider=crypto_provider,
        vs_currency=settings.vs_currency,
        max_workers=settings.history_fetch_workers,
        monthly_year_view=settings.monthly_year_view,
    )


def get_price_alert_service(
    watchlist_repo: SqlAlchemyWatchlistRepository = Depends(get_watchlist_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
    sink: NotificationSink = Depends(get_notification_sink),
) -> PriceAlertService:
    """
    Provide PriceAlertService instance.

    The notified-symbol set is shared by every request so a symbol alerts
    once per process until reset.
    """
    threshold = _threshold_pct
    if threshold is None:
        threshold = get_settings().notification_threshold_pct
    return PriceAlertService(
        watchlist_repo=watchlist_repo,
        market_data_service=market_data_service,
        sink=sink,
        threshold_pct=threshold,
        notified_symbols=_notified_symbols,
        lock=_alerts_lock,
    )


def set_alert_threshold(pct: float) -> None:
    """Override the configured alert threshold for this process."""
    global _threshold_pct
    _threshold_pct = pct


def reset_dependencies() -> None:
    """Drop process-wide state (for reconfiguration and tests)."""
    global _stock_provider, _crypto_provider, _market_data_service
    global _notification_sink, _threshold_pct
    _stock_provider = None
    _crypto_provider = None
    _market_data_service = None
    _notification_sink = None
    _threshold_pct = None
    with _alerts_lock:
        _notified_symbols.clear()
