"""Holding endpoints."""

from fastapi import APIRouter, Depends

from orion.api.deps import get_holding_service
from orion.api.schemas import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    HoldingResponse,
    HoldingListResponse,
)
from orion.services import HoldingService, HoldingCreate, HoldingUpdate

router = APIRouter(prefix="/holdings", tags=["holdings"])


@router.get("", response_model=HoldingListResponse)
def list_holdings(
    service: HoldingService = Depends(get_holding_service),
) -> HoldingListResponse:
    """List holdings in insertion order."""
    holdings = service.list_holdings()
    return HoldingListResponse(
        holdings=[HoldingResponse.model_validate(h) for h in holdings],
        count=len(holdings),
    )


@router.post("", response_model=HoldingResponse, status_code=201)
def add_holding(
    data: HoldingCreateRequest,
    service: HoldingService = Depends(get_holding_service),
) -> HoldingResponse:
    """Add a holding."""
    holding = service.add_holding(
        HoldingCreate(
            symbol=data.symbol,
            asset_type=data.asset_type,
            quantity=data.quantity,
            purchase_price=data.purchase_price,
            purchase_date=data.purchase_date,
            notes=data.notes,
        )
    )
    return HoldingResponse.model_validate(holding)


@router.get("/{holding_id}", response_model=HoldingResponse)
def get_holding(
    holding_id: str,
    service: HoldingService = Depends(get_holding_service),
) -> HoldingResponse:
    return HoldingResponse.model_validate(service.get_holding(holding_id))


@router.patch("/{holding_id}", response_model=HoldingResponse)
def update_holding(
    holding_id: str,
    data: HoldingUpdateRequest,
    service: HoldingService = Depends(get_holding_service),
) -> HoldingResponse:
    """Edit quantity, purchase price, purchase date or notes."""
    holding = service.update_holding(
        holding_id,
        HoldingUpdate(
            quantity=data.quantity,
            purchase_price=data.purchase_price,
            purchase_date=data.purchase_date,
            notes=data.notes,
        ),
    )
    return HoldingResponse.model_validate(holding)


@router.delete("/{holding_id}", status_code=204)
def remove_holding(
    holding_id: str,
    service: HoldingService = Depends(get_holding_service),
) -> None:
    service.remove_holding(holding_id)
