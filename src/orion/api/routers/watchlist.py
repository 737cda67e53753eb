"""Watchlist endpoints."""

from fastapi import APIRouter, Depends

from orion.api.deps import get_holding_service
from orion.api.schemas import WatchlistItemCreateRequest, WatchlistItemResponse
from orion.services import HoldingService

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=list[WatchlistItemResponse])
def list_watchlist(
    service: HoldingService = Depends(get_holding_service),
) -> list[WatchlistItemResponse]:
    return [WatchlistItemResponse.model_validate(i) for i in service.list_watchlist()]


@router.post("", response_model=WatchlistItemResponse, status_code=201)
def add_watchlist_item(
    data: WatchlistItemCreateRequest,
    service: HoldingService = Depends(get_holding_service),
) -> WatchlistItemResponse:
    """Add a symbol to the watchlist (duplicates are rejected)."""
    item = service.add_watchlist_item(data.symbol, data.asset_type, name=data.name)
    return WatchlistItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=204)
def remove_watchlist_item(
    item_id: str,
    service: HoldingService = Depends(get_holding_service),
) -> None:
    service.remove_watchlist_item(item_id)
