"""
Series parser: normalize provider-specific history payloads.

Both providers are reduced to ``dict[date_key, price]``. Malformed entries are
dropped, never raised; a missing or empty payload yields an empty series.
"""

import logging
import math
from typing import Any, Optional

from orion.core.dates import date_key_from_millis
from orion.domain.models import SeriesKind
from orion.domain.views import StockSeriesPayload

logger = logging.getLogger(__name__)

DAILY_SERIES_KEY = "Time Series (Daily)"
MONTHLY_SERIES_KEY = "Time Series (Monthly)"
CLOSE_FIELD = "4. close"

_SERIES_KEYS: tuple[tuple[str, SeriesKind], ...] = (
    (DAILY_SERIES_KEY, SeriesKind.DAILY),
    (MONTHLY_SERIES_KEY, SeriesKind.MONTHLY),
)


def _to_price(value: Any) -> Optional[float]:
    """Coerce a raw price to float; None if not a finite number."""
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(price) or math.isinf(price):
        return None
    return price


def resolve_stock_payload(raw: Optional[dict[str, Any]]) -> Optional[StockSeriesPayload]:
    """
    Resolve a raw stock payload to its tagged granularity.

    Returns None for missing payloads and for payloads without either series
    key (e.g. rate-limit notes or error messages).
    """
    if not raw or not isinstance(raw, dict):
        return None
    for key, kind in _SERIES_KEYS:
        series = raw.get(key)
        if isinstance(series, dict):
            return StockSeriesPayload(kind=kind, series=series)
    return None


def parse_stock_payload(payload: Optional[StockSeriesPayload]) -> dict[str, float]:
    """Extract closing prices from a resolved stock payload."""
    prices: dict[str, float] = {}
    if payload is None:
        return prices

    dropped = 0
    for date_key, row in payload.series.items():
        close = _to_price(row.get(CLOSE_FIELD)) if isinstance(row, dict) else None
        if close is None:
            dropped += 1
            continue
        prices[date_key] = close

    if dropped:
        logger.debug("Dropped %d malformed %s close entries", dropped, payload.kind.value)
    return prices


def parse_stock_series(raw: Optional[dict[str, Any]]) -> dict[str, float]:
    """Parse a daily or monthly stock payload into date-key -> close."""
    return parse_stock_payload(resolve_stock_payload(raw))


def parse_crypto_series(raw: Optional[dict[str, Any]]) -> dict[str, float]:
    """
    Parse ``{"prices": [[timestamp_ms, price], ...]}`` into date-key -> price.

    Several intraday samples on the same UTC day collapse to the last one in
    payload order.
    """
    prices: dict[str, float] = {}
    if not raw or not isinstance(raw, dict):
        return prices
    points = raw.get("prices")
    if not points:
        return prices

    for point in points:
        if not isinstance(point, (list, tuple)) or len(point) < 2:
            continue
        timestamp = _to_price(point[0])
        price = _to_price(point[1])
        if timestamp is None or price is None:
            continue
        try:
            date_key = date_key_from_millis(timestamp)
        except (OverflowError, OSError, ValueError):
            continue
        prices[date_key] = price

    return prices
