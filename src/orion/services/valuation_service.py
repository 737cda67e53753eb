"""
Valuation service: date-aligned total portfolio value over a chart range.

Stock closes (daily or monthly, trading days only) and crypto samples
(continuous, several per day) are normalized to ``date_key -> price`` maps and
merged onto one calendar grid. Each holding walks its own sorted series with a
cursor and carries the last known price forward, so the whole pass is linear
in calendar length plus total price points.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional

from orion.core.dates import now_millis
from orion.core.exceptions import ProviderError
from orion.domain.models import AssetType, Holding, HistoricalRange
from orion.domain.views import HistoricalValuation, StockHistoryResult, ValuationPoint
from orion.providers.market_data_provider import CryptoMarketDataProvider
from orion.repositories.protocols import HoldingRepository
from orion.services.calendar import (
    RANGE_DAYS,
    calendar_for_range,
    output_size_for_range,
    series_kind_for_range,
)
from orion.services.historical_cache_service import HistoricalCacheService
from orion.services.series_parser import parse_crypto_series, parse_stock_series

logger = logging.getLogger(__name__)

MISSING_DATA_MESSAGE = "Historical data is unavailable. Please try again soon."


@dataclass
class _MergeCursor:
    """Per-holding position in its ascending price series."""

    holding: Holding
    purchase_key: str
    dates: list[str]
    prices: list[float]
    index: int = 0
    last_price: Optional[float] = None

    @classmethod
    def for_holding(cls, holding: Holding, series: dict[str, float]) -> "_MergeCursor":
        try:
            purchase_key = holding.purchase_date_key
        except (TypeError, ValueError):
            purchase_key = str(holding.purchase_date)[:10]
        ordered = sorted(series.items())
        return cls(
            holding=holding,
            purchase_key=purchase_key,
            dates=[d for d, _ in ordered],
            prices=[p for _, p in ordered],
        )

    def advance_to(self, date_key: str) -> Optional[float]:
        """Consume every sample dated on/before date_key; return the last known price."""
        while self.index < len(self.dates) and self.dates[self.index] <= date_key:
            self.last_price = self.prices[self.index]
            self.index += 1
        return self.last_price


def aggregate_portfolio_value(
    holdings: list[Holding],
    stock_series: dict[str, dict[str, float]],
    crypto_series: dict[str, dict[str, float]],
    calendar: list[str],
) -> list[ValuationPoint]:
    """
    Total portfolio value for every date in `calendar` (ascending).

    A holding counts from its purchase date onward; before its first known
    price it contributes 0. Series are looked up by upper-case stock symbol or
    lower-case coin id; a missing series contributes 0 for every date.
    """
    if not holdings or not calendar:
        return []

    cursors = []
    for holding in holdings:
        source = stock_series if holding.asset_type == AssetType.STOCK else crypto_series
        series = source.get(holding.lookup_symbol) or {}
        cursors.append(_MergeCursor.for_holding(holding, series))

    points: list[ValuationPoint] = []
    for date_key in calendar:
        total = 0.0
        for cursor in cursors:
            if cursor.purchase_key > date_key:
                continue
            price = cursor.advance_to(date_key)
            if price is not None:
                total += price * cursor.holding.quantity
        points.append(ValuationPoint(date=date_key, value=total))
    return points


@dataclass
class _FetchOutcome:
    data: Optional[dict[str, Any]] = None
    error: Optional[BaseException] = None
    fetched_at: Optional[int] = None


@dataclass
class _SeriesBundle:
    stock_series: dict[str, dict[str, float]] = field(default_factory=dict)
    crypto_series: dict[str, dict[str, float]] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


class ValuationService:
    """
    Builds the chart-ready valuation series for the current holdings.

    All symbols are fetched concurrently; one symbol failing only removes its
    contribution and raises the aggregate error flag.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        cache_service: HistoricalCacheService,
        crypto_provider: CryptoMarketDataProvider,
        vs_currency: str = "usd",
        max_workers: int = 8,
        monthly_year_view: bool = True,
        clock: Callable[[], int] = now_millis,
    ):
        self._holding_repo = holding_repo
        self._cache = cache_service
        self._crypto = crypto_provider
        self._vs_currency = vs_currency
        self._max_workers = max(1, max_workers)
        self._monthly_year_view = monthly_year_view
        self._clock = clock

    def get_historical_valuation(
        self,
        history_range: HistoricalRange,
        today: Optional[date] = None,
    ) -> HistoricalValuation:
        """Valuation series for the selected range, with an aggregate error flag."""
        history_range = HistoricalRange(history_range)
        holdings = self._holding_repo.list_all()
        calendar = calendar_for_range(history_range, self._monthly_year_view, today)
        if not holdings or not calendar:
            return HistoricalValuation()

        bundle = self._load_series(holdings, history_range)
        points = aggregate_portfolio_value(
            holdings,
            bundle.stock_series,
            bundle.crypto_series,
            calendar,
        )

        is_error = bool(bundle.errors or bundle.missing)
        error = None
        if bundle.errors:
            error = bundle.errors[0]
        elif bundle.missing:
            error = MISSING_DATA_MESSAGE

        return HistoricalValuation(
            points=points,
            is_error=is_error,
            error=error,
            missing_symbols=bundle.missing,
        )

    def _fetch_market_chart(self, coin_id: str, days: int) -> dict[str, Any]:
        try:
            return self._crypto.get_market_chart(coin_id, self._vs_currency, days)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(coin_id, str(exc) or exc.__class__.__name__) from exc

    def _load_series(
        self,
        holdings: list[Holding],
        history_range: HistoricalRange,
    ) -> _SeriesBundle:
        stock_symbols = _unique(h.lookup_symbol for h in holdings if h.asset_type == AssetType.STOCK)
        coin_ids = _unique(h.lookup_symbol for h in holdings if h.asset_type == AssetType.CRYPTO)

        outputsize = output_size_for_range(history_range)
        kind = series_kind_for_range(history_range, self._monthly_year_view)
        days = RANGE_DAYS[history_range]

        seeds = {symbol: self._cache.lookup(symbol, outputsize, kind) for symbol in stock_symbols}
        to_fetch = [s for s in stock_symbols if self._cache.needs_fetch(seeds[s])]

        stock_outcomes: dict[str, _FetchOutcome] = {}
        crypto_outcomes: dict[str, _FetchOutcome] = {}

        if to_fetch or coin_ids:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                futures = {}
                for symbol in to_fetch:
                    fut = pool.submit(self._cache.fetch, symbol, outputsize, kind)
                    futures[fut] = (stock_outcomes, symbol)
                for coin_id in coin_ids:
                    fut = pool.submit(self._fetch_market_chart, coin_id, days)
                    futures[fut] = (crypto_outcomes, coin_id)

                for fut in as_completed(futures):
                    outcomes, key = futures[fut]
                    try:
                        outcomes[key] = _FetchOutcome(data=fut.result(), fetched_at=self._clock())
                    except Exception as exc:
                        outcomes[key] = _FetchOutcome(error=exc)

        bundle = _SeriesBundle()

        for symbol in stock_symbols:
            outcome = stock_outcomes.get(symbol, _FetchOutcome())
            result: StockHistoryResult = self._cache.resolve(
                symbol,
                seeds[symbol],
                outputsize,
                data=outcome.data,
                error=outcome.error,
                fetched_at=outcome.fetched_at,
            )
            if result.is_error:
                bundle.errors.append(f"{symbol}: {result.error}")
            series = parse_stock_series(result.data)
            if not series:
                bundle.missing.append(symbol)
                continue
            bundle.stock_series[symbol] = series

        for coin_id in coin_ids:
            outcome = crypto_outcomes.get(coin_id, _FetchOutcome())
            if outcome.error is not None:
                logger.warning("Crypto history fetch failed for %s: %s", coin_id, outcome.error)
                bundle.errors.append(f"{coin_id}: {outcome.error}")
            series = parse_crypto_series(outcome.data)
            if not series:
                bundle.missing.append(coin_id)
                continue
            bundle.crypto_series[coin_id] = series

        if bundle.missing:
            logger.info("No usable history for: %s", ", ".join(bundle.missing))
        return bundle


def _unique(symbols) -> list[str]:
    """De-duplicate preserving first-seen order."""
    return list(dict.fromkeys(symbols))
