"""Price alert service: detect and dispatch significant watchlist moves."""

import logging
import threading
from collections.abc import Set
from typing import Optional

from orion.domain.models import AlertDirection
from orion.domain.views import (
    AlertCheckResult,
    HoldingWithPrice,
    PriceAlert,
    WatchlistItemWithPrice,
)
from orion.providers.notification_sink import NotificationSink
from orion.repositories.protocols import WatchlistRepository
from orion.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_THRESHOLD_PCT = 5.0
MIN_THRESHOLD_PCT = 0.1
MAX_THRESHOLD_PCT = 100.0


def clamp_threshold(pct: float) -> float:
    return max(MIN_THRESHOLD_PCT, min(MAX_THRESHOLD_PCT, pct))


def detect_significant_price_changes(
    holdings: list[HoldingWithPrice],
    watchlist: list[WatchlistItemWithPrice],
    threshold_pct: float,
    notified_symbols: Set[str],
) -> list[PriceAlert]:
    """
    Watchlist items whose |change_pct| >= threshold and not yet notified.

    Holdings are accepted for symmetry but not evaluated: they carry P/L since
    purchase, not a 24h change. `notified_symbols` is only read.
    """
    alerts: list[PriceAlert] = []
    for item in watchlist:
        if abs(item.change_pct) < threshold_pct:
            continue
        if item.symbol in notified_symbols:
            continue
        alerts.append(
            PriceAlert(
                symbol=item.symbol,
                name=item.name or item.symbol,
                change_pct=item.change_pct,
                current_price=item.current_price,
                direction=AlertDirection.UP if item.change_pct >= 0 else AlertDirection.DOWN,
                asset_type=item.asset_type,
            )
        )
    return alerts


class PriceAlertService:
    """
    Session-scoped alerting over the watchlist.

    Remembers which symbols were already notified so each one alerts at most
    once until `reset_notified_symbols` (e.g. at the start of a new day).
    """

    def __init__(
        self,
        watchlist_repo: WatchlistRepository,
        market_data_service: MarketDataService,
        sink: NotificationSink,
        threshold_pct: float = DEFAULT_NOTIFICATION_THRESHOLD_PCT,
        notified_symbols: Optional[set[str]] = None,
        lock: Optional[threading.Lock] = None,
    ):
        self._watchlist_repo = watchlist_repo
        self._market = market_data_service
        self._sink = sink
        self._threshold_pct = clamp_threshold(threshold_pct)
        self._notified: set[str] = notified_symbols if notified_symbols is not None else set()
        self._lock = lock if lock is not None else threading.Lock()

    @property
    def threshold_pct(self) -> float:
        return self._threshold_pct

    def set_threshold(self, pct: float) -> float:
        self._threshold_pct = clamp_threshold(pct)
        return self._threshold_pct

    @property
    def notified_symbols(self) -> frozenset[str]:
        return frozenset(self._notified)

    def get_watchlist_with_prices(self) -> list[WatchlistItemWithPrice]:
        """Watchlist items that currently have a quote with a change figure."""
        items = self._watchlist_repo.list_all()
        if not items:
            return []

        quotes = self._market.get_quotes([(i.lookup_symbol, i.asset_type) for i in items])
        priced = []
        for item in items:
            quote = quotes.get((item.lookup_symbol, item.asset_type))
            if quote is None or quote.change_pct is None:
                continue
            priced.append(
                WatchlistItemWithPrice(
                    item=item,
                    current_price=quote.current_price,
                    change_pct=quote.change_pct,
                    name=item.name,
                )
            )
        return priced

    def process_alerts(
        self,
        holdings: Optional[list[HoldingWithPrice]] = None,
        watchlist: Optional[list[WatchlistItemWithPrice]] = None,
    ) -> AlertCheckResult:
        """
        Detect alerts and deliver each through the sink.

        A symbol is recorded as notified only once its delivery succeeded.
        Detection and delivery run under the lock shared with other services
        holding the same notified set, so a symbol is delivered at most once.
        """
        if watchlist is None:
            watchlist = self.get_watchlist_with_prices()

        sent = 0
        with self._lock:
            alerts = detect_significant_price_changes(
                holdings or [],
                watchlist,
                self._threshold_pct,
                self._notified,
            )
            for alert in alerts:
                if self._sink.deliver(alert):
                    self._notified.add(alert.symbol)
                    sent += 1
                else:
                    logger.debug("Alert for %s not delivered", alert.symbol)

        return AlertCheckResult(alerts=alerts, sent_count=sent)

    def reset_notified_symbols(self) -> None:
        with self._lock:
            self._notified.clear()
