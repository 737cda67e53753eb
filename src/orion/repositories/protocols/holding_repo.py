"""Holding and watchlist repository protocols."""

from typing import Protocol, Optional

from orion.domain.models import Holding, WatchlistItem


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        ...

    def get_by_id(self, holding_id: str) -> Optional[Holding]:
        """Retrieve holding by ID."""
        ...

    def list_all(self) -> list[Holding]:
        """List all holdings in insertion order."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update an existing holding."""
        ...

    def delete(self, holding_id: str) -> None:
        """Delete a holding."""
        ...


class WatchlistRepository(Protocol):
    """Interface for watchlist data access."""

    def create(self, item: WatchlistItem) -> WatchlistItem:
        ...

    def get_by_id(self, item_id: str) -> Optional[WatchlistItem]:
        ...

    def get_by_symbol(self, symbol: str) -> Optional[WatchlistItem]:
        ...

    def list_all(self) -> list[WatchlistItem]:
        ...

    def delete(self, item_id: str) -> None:
        ...
