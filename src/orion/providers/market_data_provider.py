"""Market data provider protocols.

Two providers with incompatible history shapes are consumed:

- stocks return close prices keyed by date string under
  ``"Time Series (Daily)"`` or ``"Time Series (Monthly)"``
- crypto returns ``{"prices": [[timestamp_ms, price], ...]}``
"""

from typing import Any, Protocol

from orion.domain.models import OutputSize, SeriesKind
from orion.domain.views import Quote


class StockMarketDataProvider(Protocol):
    """
    Protocol for the stock market data provider.

    Implementations may raise on network/API failure; callers degrade
    gracefully.
    """

    def get_time_series(
        self,
        symbol: str,
        outputsize: OutputSize,
        kind: SeriesKind = SeriesKind.DAILY,
    ) -> dict[str, Any]:
        """Return the raw close-price payload for a symbol."""
        ...

    def get_quote(self, symbol: str) -> Quote:
        """Return the live quote for a symbol."""
        ...


class CryptoMarketDataProvider(Protocol):
    """Protocol for the crypto market data provider."""

    def get_market_chart(
        self,
        coin_id: str,
        vs_currency: str,
        days: int,
    ) -> dict[str, Any]:
        """Return ``{"prices": [[timestamp_ms, price], ...]}`` for a coin."""
        ...

    def get_spot_prices(
        self,
        coin_ids: list[str],
        vs_currency: str,
    ) -> dict[str, Quote]:
        """
        Return spot prices for coin ids in one batch call.

        Unknown coins are omitted from the result.
        """
        ...
