"""Market data and notification providers."""

from orion.providers.market_data_provider import (
    StockMarketDataProvider,
    CryptoMarketDataProvider,
)
from orion.providers.notification_sink import NotificationSink, LoggingNotificationSink
from orion.providers.stub_provider import (
    StubStockMarketDataProvider,
    StubCryptoMarketDataProvider,
)

__all__ = [
    "StockMarketDataProvider",
    "CryptoMarketDataProvider",
    "NotificationSink",
    "LoggingNotificationSink",
    "StubStockMarketDataProvider",
    "StubCryptoMarketDataProvider",
]
