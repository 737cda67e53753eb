"""Stub market data providers for offline/testing use."""

import random
from datetime import date, datetime, timedelta
from typing import Any, Optional

from orion.core.dates import UTC, now_utc, today_utc
from orion.domain.models import OutputSize, SeriesKind
from orion.domain.views import Quote


# Deterministic base prices for common symbols
_STUB_STOCK_PRICES: dict[str, float] = {
    "AAPL": 185.50,
    "GOOGL": 142.75,
    "MSFT": 378.25,
    "AMZN": 178.50,
    "TSLA": 248.75,
    "NVDA": 485.25,
    "META": 505.50,
    "SPY": 485.25,
}

_STUB_COIN_PRICES: dict[str, float] = {
    "bitcoin": 43250.00,
    "ethereum": 2285.50,
    "solana": 98.40,
    "cardano": 0.52,
    "dogecoin": 0.08,
}

_COMPACT_TRADING_DAYS = 100
_FULL_TRADING_DAYS = 2 * 252
_MONTHS = 24


def _random_walk(rng: random.Random, end_price: float, steps: int, vol: float) -> list[float]:
    """Walk backwards from end_price so the latest sample equals it."""
    prices = [end_price]
    for _ in range(steps - 1):
        prev = prices[-1] / (1 + rng.gauss(0, vol))
        prices.append(max(prev, 0.0001))
    prices.reverse()
    return prices


def _trading_days(end: date, count: int) -> list[date]:
    """Last `count` weekdays ending at or before `end`, oldest first."""
    days: list[date] = []
    d = end
    while len(days) < count:
        if d.weekday() < 5:
            days.append(d)
        d -= timedelta(days=1)
    days.reverse()
    return days


def _month_ends(end: date, count: int) -> list[date]:
    """Last trading day of each of the trailing `count` months, oldest first."""
    ends: list[date] = []
    cursor = end
    for _ in range(count):
        d = cursor
        while d.weekday() >= 5:
            d -= timedelta(days=1)
        ends.append(d)
        cursor = cursor.replace(day=1) - timedelta(days=1)
    ends.reverse()
    return ends


class StubStockMarketDataProvider:
    """
    Stub stock provider with deterministic fake data for offline operation.

    Produces payloads in the provider's wire shape; unknown symbols get a
    price derived from the symbol itself.
    """

    def __init__(self, seed: int = 42, today: Optional[date] = None):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed
        self._today = today

    def _rng(self, symbol: str) -> random.Random:
        return random.Random(f"{self._seed}:{symbol}")

    def _base_price(self, symbol: str) -> float:
        if symbol in _STUB_STOCK_PRICES:
            return _STUB_STOCK_PRICES[symbol]
        return round(50 + self._rng(symbol).random() * 200, 2)

    def get_time_series(
        self,
        symbol: str,
        outputsize: OutputSize,
        kind: SeriesKind = SeriesKind.DAILY,
    ) -> dict[str, Any]:
        """Return a stub daily or monthly close-price payload."""
        symbol = symbol.upper()
        today = self._today or today_utc()
        rng = self._rng(symbol)

        if kind == SeriesKind.MONTHLY:
            dates = _month_ends(today, _MONTHS)
            key = "Time Series (Monthly)"
            vol = 0.06
        else:
            count = (
                _FULL_TRADING_DAYS
                if OutputSize(outputsize) == OutputSize.FULL
                else _COMPACT_TRADING_DAYS
            )
            dates = _trading_days(today, count)
            key = "Time Series (Daily)"
            vol = 0.015

        closes = _random_walk(rng, self._base_price(symbol), len(dates), vol)
        series = {
            d.isoformat(): {"4. close": f"{close:.4f}"}
            for d, close in zip(reversed(dates), reversed(closes))
        }
        return {
            "Meta Data": {
                "2. Symbol": symbol,
                "3. Last Refreshed": dates[-1].isoformat(),
                "4. Output Size": OutputSize(outputsize).value,
            },
            key: series,
        }

    def get_quote(self, symbol: str) -> Quote:
        """Return a stub quote for a symbol."""
        symbol = symbol.upper()
        change_pct = round((self._rng(symbol).random() - 0.5) * 4, 2)
        return Quote(
            symbol=symbol,
            current_price=self._base_price(symbol),
            change_pct=change_pct,
            as_of=now_utc(),
        )


class StubCryptoMarketDataProvider:
    """Stub crypto provider; hourly samples up to 90 days, daily beyond."""

    def __init__(self, seed: int = 42, now: Optional[datetime] = None):
        self._seed = seed
        self._now = now

    def _rng(self, coin_id: str) -> random.Random:
        return random.Random(f"{self._seed}:{coin_id}")

    def _base_price(self, coin_id: str) -> float:
        if coin_id in _STUB_COIN_PRICES:
            return _STUB_COIN_PRICES[coin_id]
        return round(1 + self._rng(coin_id).random() * 100, 4)

    def get_market_chart(
        self,
        coin_id: str,
        vs_currency: str,
        days: int,
    ) -> dict[str, Any]:
        """Return stub ``prices`` pairs covering the last `days` days."""
        coin_id = coin_id.lower()
        now = self._now or now_utc()
        step = timedelta(hours=1) if days <= 90 else timedelta(days=1)
        start = now - timedelta(days=days)
        count = int((now - start) / step) + 1

        prices = _random_walk(self._rng(coin_id), self._base_price(coin_id), count, 0.01)
        points = []
        for i, price in enumerate(prices):
            ts = start + step * i
            if ts.tzinfo is None:
                ts = UTC.localize(ts)
            points.append([int(ts.timestamp() * 1000), round(price, 6)])
        return {"prices": points, "market_caps": [], "total_volumes": []}

    def get_spot_prices(
        self,
        coin_ids: list[str],
        vs_currency: str,
    ) -> dict[str, Quote]:
        """Return stub spot prices for requested coins."""
        as_of = now_utc()
        result: dict[str, Quote] = {}
        for coin_id in coin_ids:
            coin_id = coin_id.lower()
            change_pct = round((self._rng(coin_id).random() - 0.5) * 10, 2)
            result[coin_id] = Quote(
                symbol=coin_id,
                current_price=self._base_price(coin_id),
                change_pct=change_pct,
                as_of=as_of,
            )
        return result
