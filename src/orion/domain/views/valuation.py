"""View models for the historical valuation series."""

from dataclasses import dataclass, field
from typing import Any, Optional

from orion.domain.models import SeriesKind


@dataclass(frozen=True)
class StockSeriesPayload:
    """Stock history resolved to its granularity; rows keyed by date-key."""

    kind: SeriesKind
    series: dict[str, dict[str, Any]]


@dataclass
class StockHistoryResult:
    """
    Best-effort stock history for one symbol.

    data is the freshest payload available (fetched or cached seed); error is
    set when a fetch was attempted and failed.
    """

    symbol: str
    data: Optional[dict[str, Any]] = None
    from_cache: bool = False
    fetched_at: Optional[int] = None
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass
class ValuationPoint:
    """Total portfolio value on one calendar date."""

    date: str
    value: float


@dataclass
class HistoricalValuation:
    """Chart-ready valuation series plus an aggregate error flag."""

    points: list[ValuationPoint] = field(default_factory=list)
    is_error: bool = False
    error: Optional[str] = None
    missing_symbols: list[str] = field(default_factory=list)
