"""Market data service for live stock quotes and crypto spot prices."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from orion.core.dates import now_utc
from orion.domain.models import AssetType
from orion.domain.views import Quote
from orion.providers.market_data_provider import (
    StockMarketDataProvider,
    CryptoMarketDataProvider,
)

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching live prices.

    Wraps both providers with a per-symbol TTL cache and graceful degradation:
    on provider failure the last cached quote (however old) is returned, and
    symbols with no quote at all are simply omitted.
    """

    def __init__(
        self,
        stock_provider: StockMarketDataProvider,
        crypto_provider: CryptoMarketDataProvider,
        cache_ttl_seconds: int = 60,
        vs_currency: str = "usd",
        max_workers: int = 8,
    ):
        self._stock_provider = stock_provider
        self._crypto_provider = crypto_provider
        self._cache_ttl = cache_ttl_seconds
        self._vs_currency = vs_currency
        self._max_workers = max(1, max_workers)
        self._stock_cache: dict[str, tuple[Quote, datetime]] = {}
        self._crypto_cache: dict[str, tuple[Quote, datetime]] = {}

    def get_stock_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for stock symbols, one provider call per symbol in parallel.

        Returns dict mapping upper-case symbol -> Quote.
        """
        symbols = list(dict.fromkeys(s.upper() for s in symbols if s))
        if not symbols:
            return {}

        result = self._cached(self._stock_cache, symbols)
        missing = [s for s in symbols if s not in result]
        if missing:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(missing))) as pool:
                futures = {s: pool.submit(self._stock_provider.get_quote, s) for s in missing}
            fetched_at = now_utc()
            for symbol, fut in futures.items():
                try:
                    quote = fut.result()
                except Exception as exc:
                    logger.warning("Quote fetch failed for %s: %s", symbol, exc)
                    continue
                self._stock_cache[symbol] = (quote, fetched_at)
                result[symbol] = quote

        return self._with_stale_fallback(self._stock_cache, symbols, result)

    def get_crypto_quotes(self, coin_ids: list[str]) -> dict[str, Quote]:
        """
        Fetch spot prices for coin ids in one batch call.

        Returns dict mapping lower-case coin id -> Quote.
        """
        coin_ids = list(dict.fromkeys(c.lower() for c in coin_ids if c))
        if not coin_ids:
            return {}

        result = self._cached(self._crypto_cache, coin_ids)
        missing = [c for c in coin_ids if c not in result]
        if missing:
            try:
                fetched = self._crypto_provider.get_spot_prices(missing, self._vs_currency)
            except Exception as exc:
                logger.warning("Spot price fetch failed for %s: %s", ",".join(missing), exc)
                fetched = {}
            fetched_at = now_utc()
            for coin_id, quote in fetched.items():
                coin_id = coin_id.lower()
                self._crypto_cache[coin_id] = (quote, fetched_at)
                result[coin_id] = quote

        return self._with_stale_fallback(self._crypto_cache, coin_ids, result)

    def get_quotes(self, assets: list[tuple[str, AssetType]]) -> dict[tuple[str, AssetType], Quote]:
        """Quotes for mixed (symbol, asset_type) pairs, keyed by normalized pair."""
        stock_symbols = [s.upper() for s, t in assets if AssetType(t) == AssetType.STOCK]
        coin_ids = [s.lower() for s, t in assets if AssetType(t) == AssetType.CRYPTO]

        quotes: dict[tuple[str, AssetType], Quote] = {}
        for symbol, quote in self.get_stock_quotes(stock_symbols).items():
            quotes[(symbol, AssetType.STOCK)] = quote
        for coin_id, quote in self.get_crypto_quotes(coin_ids).items():
            quotes[(coin_id, AssetType.CRYPTO)] = quote
        return quotes

    def clear_cache(self) -> None:
        self._stock_cache.clear()
        self._crypto_cache.clear()

    def _cached(
        self,
        cache: dict[str, tuple[Quote, datetime]],
        keys: list[str],
    ) -> dict[str, Quote]:
        """Entries still within TTL."""
        now = now_utc()
        result = {}
        for key in keys:
            entry = cache.get(key)
            if entry and self._is_valid(entry[1], now):
                result[key] = entry[0]
        return result

    def _is_valid(self, cached_at: datetime, now: Optional[datetime] = None) -> bool:
        """Check if a cache timestamp is within TTL."""
        elapsed = ((now or now_utc()) - cached_at).total_seconds()
        return elapsed < self._cache_ttl

    @staticmethod
    def _with_stale_fallback(
        cache: dict[str, tuple[Quote, datetime]],
        keys: list[str],
        result: dict[str, Quote],
    ) -> dict[str, Quote]:
        """Fill gaps left by failed fetches from expired cache entries, preserving order."""
        out = {}
        for key in keys:
            if key in result:
                out[key] = result[key]
            elif key in cache:
                out[key] = cache[key][0]
        return out
