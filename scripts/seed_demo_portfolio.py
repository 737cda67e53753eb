#!/usr/bin/env python3
"""
Seed a demo portfolio and print what the dashboard would show.
Buys a handful of stocks and coins over the last 3 months, adds a watchlist,
then prints the 30d valuation, current metrics and any price alerts.
"""

import random
import sys
from datetime import timedelta
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from orion.config import get_settings, setup_logging
from orion.core.dates import today_utc
from orion.core.exceptions import ValidationError
from orion.domain.models import AssetType, HistoricalRange
from orion.providers import (
    LoggingNotificationSink,
    StubCryptoMarketDataProvider,
    StubStockMarketDataProvider,
)
from orion.repositories.sqlalchemy import (
    SqlAlchemyHistoricalCacheRepository,
    SqlAlchemyHoldingRepository,
    SqlAlchemyWatchlistRepository,
    get_session,
    init_db,
)
from orion.services import (
    HistoricalCacheService,
    HoldingCreate,
    HoldingService,
    MarketDataService,
    MetricsService,
    PriceAlertService,
    ValuationService,
)

STOCKS = [
    ("AAPL", 180.0),
    ("MSFT", 420.0),
    ("GOOGL", 160.0),
    ("NVDA", 500.0),
]

COINS = [
    ("bitcoin", 43000.0),
    ("ethereum", 2300.0),
]

WATCHLIST = [
    ("TSLA", AssetType.STOCK, "Tesla"),
    ("META", AssetType.STOCK, "Meta Platforms"),
    ("solana", AssetType.CRYPTO, "Solana"),
]


def seed(holding_service: HoldingService) -> None:
    """Create holdings bought at random days over the last 90 days."""
    today = today_utc()
    rng = random.Random(7)

    for symbol, price in STOCKS:
        bought = today - timedelta(days=rng.randint(5, 90))
        holding_service.add_holding(HoldingCreate(
            symbol=symbol,
            asset_type=AssetType.STOCK,
            quantity=rng.randint(2, 20),
            purchase_price=round(price * rng.uniform(0.9, 1.1), 2),
            purchase_date=bought.isoformat(),
        ))
        print(f"✓ Bought {symbol} on {bought}")

    for coin_id, price in COINS:
        bought = today - timedelta(days=rng.randint(5, 90))
        holding_service.add_holding(HoldingCreate(
            symbol=coin_id,
            asset_type=AssetType.CRYPTO,
            quantity=round(rng.uniform(0.05, 2.0), 4),
            purchase_price=round(price * rng.uniform(0.9, 1.1), 2),
            purchase_date=bought.isoformat(),
        ))
        print(f"✓ Bought {coin_id} on {bought}")

    for symbol, asset_type, name in WATCHLIST:
        try:
            holding_service.add_watchlist_item(symbol, asset_type, name=name)
            print(f"✓ Watching {symbol}")
        except ValidationError:
            print(f"✓ {symbol} already on watchlist")


def main() -> None:
    setup_logging()
    init_db()
    settings = get_settings()
    print(f"Database: {settings.get_database_url()}")

    session = get_session()
    try:
        holding_repo = SqlAlchemyHoldingRepository(session)
        watchlist_repo = SqlAlchemyWatchlistRepository(session)
        stock_provider = StubStockMarketDataProvider()
        crypto_provider = StubCryptoMarketDataProvider()

        holding_service = HoldingService(holding_repo, watchlist_repo)
        if not holding_service.list_holdings():
            seed(holding_service)

        market = MarketDataService(
            stock_provider,
            crypto_provider,
            cache_ttl_seconds=settings.quote_cache_ttl_seconds,
            vs_currency=settings.vs_currency,
        )
        valuation_service = ValuationService(
            holding_repo=holding_repo,
            cache_service=HistoricalCacheService(
                SqlAlchemyHistoricalCacheRepository(session),
                stock_provider,
                ttl_seconds=settings.stock_cache_ttl_seconds,
            ),
            crypto_provider=crypto_provider,
            vs_currency=settings.vs_currency,
            max_workers=settings.history_fetch_workers,
            monthly_year_view=settings.monthly_year_view,
        )

        print("\n30d valuation")
        print("=" * 40)
        valuation = valuation_service.get_historical_valuation(HistoricalRange.MONTH)
        for point in valuation.points[::5] + valuation.points[-1:]:
            print(f"  {point.date}  ${point.value:>14,.2f}")
        if valuation.is_error:
            print(f"  ! {valuation.error}")

        metrics = MetricsService(holding_repo, market).get_metrics()
        print("\nMetrics")
        print("=" * 40)
        print(f"  Total value: ${metrics.total_value:,.2f}")
        print(f"  Total P/L:   ${metrics.total_pl:,.2f} ({metrics.total_pl_pct:+.2f}%)")
        print(f"  Stocks {metrics.stock_pct:.1f}% / Crypto {metrics.crypto_pct:.1f}%")

        alerts = PriceAlertService(
            watchlist_repo,
            market,
            LoggingNotificationSink(),
            threshold_pct=settings.notification_threshold_pct,
        ).process_alerts()
        print(f"\nAlerts sent: {alerts.sent_count}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
