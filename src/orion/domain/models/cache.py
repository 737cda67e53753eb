"""Cache model for persisted stock history payloads."""

from dataclasses import dataclass
from typing import Any

from orion.domain.models.enums import OutputSize


@dataclass
class StockHistoricalCacheEntry:
    """
    Raw provider payload for one stock symbol, with its fetch time.

    Staleness never invalidates the data itself; it only makes the entry
    eligible for a refetch.
    """

    data: dict[str, Any]
    outputsize: OutputSize
    fetched_at: int  # epoch milliseconds

    def __post_init__(self) -> None:
        if isinstance(self.outputsize, str):
            self.outputsize = OutputSize(self.outputsize)

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.fetched_at

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """Fresh iff now - fetched_at < ttl."""
        return self.age_ms(now_ms) < ttl_ms

    def covers(self, requested: OutputSize) -> bool:
        """A compact request can be seeded by any entry; full needs a full entry."""
        return requested == OutputSize.COMPACT or self.outputsize == OutputSize.FULL
