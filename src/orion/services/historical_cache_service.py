"""Historical cache service: TTL policy around persisted stock history payloads."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from orion.core.dates import now_millis
from orion.core.exceptions import ProviderError
from orion.domain.models import OutputSize, SeriesKind, StockHistoricalCacheEntry
from orion.domain.views import StockHistoryResult
from orion.providers.market_data_provider import StockMarketDataProvider
from orion.repositories.protocols import HistoricalCacheRepository
from orion.services.series_parser import resolve_stock_payload

logger = logging.getLogger(__name__)

DEFAULT_STOCK_CACHE_TTL_SECONDS = 24 * 60 * 60


@dataclass
class CachedSeed:
    """A cache entry usable for the current request, with its freshness."""

    entry: StockHistoricalCacheEntry
    is_fresh: bool

    @property
    def data(self) -> dict[str, Any]:
        return self.entry.data


class HistoricalCacheService:
    """
    Per-symbol stock history cache with a TTL.

    A fresh entry seeds the result and suppresses the network call; a stale
    entry is kept as a placeholder while a refetch is attempted. Repository
    access happens on the caller's thread; only `fetch` is safe to run on a
    worker thread.
    """

    def __init__(
        self,
        cache_repo: HistoricalCacheRepository,
        provider: StockMarketDataProvider,
        ttl_seconds: int = DEFAULT_STOCK_CACHE_TTL_SECONDS,
        clock: Callable[[], int] = now_millis,
    ):
        self._cache_repo = cache_repo
        self._provider = provider
        self._ttl_ms = ttl_seconds * 1000
        self._clock = clock

    def lookup(
        self,
        symbol: str,
        outputsize: OutputSize,
        kind: SeriesKind = SeriesKind.DAILY,
    ) -> Optional[CachedSeed]:
        """
        Return the cached entry for a symbol if it can serve this request.

        A compact request is served by any entry, a full request only by a full
        one. A daily request needs a daily payload; a monthly grid can be
        evaluated from either granularity.
        """
        entry = self._cache_repo.get(symbol.upper())
        if entry is None:
            return None
        if not entry.covers(OutputSize(outputsize)):
            return None
        payload = resolve_stock_payload(entry.data)
        if payload is None:
            return None
        if kind == SeriesKind.DAILY and payload.kind != SeriesKind.DAILY:
            return None
        return CachedSeed(entry=entry, is_fresh=entry.is_fresh(self._clock(), self._ttl_ms))

    @staticmethod
    def needs_fetch(seed: Optional[CachedSeed]) -> bool:
        return seed is None or not seed.is_fresh

    def fetch(
        self,
        symbol: str,
        outputsize: OutputSize,
        kind: SeriesKind = SeriesKind.DAILY,
    ) -> dict[str, Any]:
        """Call the provider; any failure is raised as ProviderError."""
        symbol = symbol.upper()
        try:
            return self._provider.get_time_series(symbol, OutputSize(outputsize), kind)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(symbol, str(exc) or exc.__class__.__name__) from exc

    def store(
        self,
        symbol: str,
        data: dict[str, Any],
        outputsize: OutputSize,
        fetched_at: int,
    ) -> bool:
        """
        Write a fetched payload back to the cache.

        Skipped when the stored entry is at least as new as `fetched_at`, for
        payloads that carry no series (provider notes/errors), and when a
        compact payload would replace a full entry that is still fresh.
        """
        symbol = symbol.upper()
        outputsize = OutputSize(outputsize)
        if resolve_stock_payload(data) is None:
            logger.info("Not caching %s: payload has no time series", symbol)
            return False

        existing = self._cache_repo.get(symbol)
        if existing is not None and existing.fetched_at >= fetched_at:
            logger.debug("Cache for %s already newer (%d >= %d)", symbol, existing.fetched_at, fetched_at)
            return False
        if (
            existing is not None
            and outputsize == OutputSize.COMPACT
            and existing.outputsize == OutputSize.FULL
            and existing.is_fresh(fetched_at, self._ttl_ms)
        ):
            logger.debug("Keeping fresh full history for %s over a compact payload", symbol)
            return False

        self._cache_repo.put(
            symbol,
            StockHistoricalCacheEntry(
                data=data,
                outputsize=outputsize,
                fetched_at=fetched_at,
            ),
        )
        return True

    def resolve(
        self,
        symbol: str,
        seed: Optional[CachedSeed],
        outputsize: OutputSize,
        data: Optional[dict[str, Any]] = None,
        error: Optional[BaseException] = None,
        fetched_at: Optional[int] = None,
    ) -> StockHistoryResult:
        """
        Combine a cache seed with the outcome of a fetch (if one was made).

        On failure the stale seed, if any, is still returned as data. A fetched
        payload without a series (e.g. a rate-limit note) counts as a failure
        when there is a seed to fall back to.
        """
        symbol = symbol.upper()

        if error is None and data is not None and seed is not None and resolve_stock_payload(data) is None:
            error = ProviderError(symbol, "response has no time series")

        if error is not None:
            logger.warning("Stock history fetch failed for %s: %s", symbol, error)
            return StockHistoryResult(
                symbol=symbol,
                data=seed.data if seed else None,
                from_cache=seed is not None,
                fetched_at=seed.entry.fetched_at if seed else None,
                error=str(error) or error.__class__.__name__,
            )

        if data is not None:
            fetched_at = fetched_at if fetched_at is not None else self._clock()
            self.store(symbol, data, outputsize, fetched_at)
            return StockHistoryResult(symbol=symbol, data=data, fetched_at=fetched_at)

        if seed is not None:
            return StockHistoryResult(
                symbol=symbol,
                data=seed.data,
                from_cache=True,
                fetched_at=seed.entry.fetched_at,
            )

        return StockHistoryResult(symbol=symbol)

    def load_stock_history(
        self,
        symbol: str,
        outputsize: OutputSize,
        kind: SeriesKind = SeriesKind.DAILY,
    ) -> StockHistoryResult:
        """Sequential lookup → fetch-if-needed → write-back for one symbol."""
        seed = self.lookup(symbol, outputsize, kind)
        if not self.needs_fetch(seed):
            logger.debug("Using fresh cached history for %s", symbol.upper())
            return self.resolve(symbol, seed, outputsize)

        try:
            data = self.fetch(symbol, outputsize, kind)
        except Exception as exc:
            return self.resolve(symbol, seed, outputsize, error=exc)
        return self.resolve(symbol, seed, outputsize, data=data, fetched_at=self._clock())
