"""Pydantic schemas for holding and watchlist endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from orion.domain.models.enums import AssetType


class HoldingCreateRequest(BaseModel):
    """Request schema for adding a holding."""

    symbol: str = Field(..., min_length=1, max_length=64, description="Ticker or coin id")
    asset_type: AssetType
    quantity: float = Field(..., gt=0)
    purchase_price: float = Field(..., ge=0, description="USD per unit")
    purchase_date: Optional[str] = Field(None, description="ISO date; defaults to today")
    notes: Optional[str] = None


class HoldingUpdateRequest(BaseModel):
    """Request schema for editing a holding (all fields optional)."""

    quantity: Optional[float] = Field(None, gt=0)
    purchase_price: Optional[float] = Field(None, ge=0)
    purchase_date: Optional[str] = None
    notes: Optional[str] = None


class HoldingResponse(BaseModel):
    """Response schema for a single holding."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    asset_type: AssetType
    quantity: float
    purchase_price: float
    purchase_date: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class HoldingListResponse(BaseModel):
    """Response schema for listing holdings."""

    holdings: list[HoldingResponse]
    count: int


class WatchlistItemCreateRequest(BaseModel):
    """Request schema for adding a watchlist item."""

    symbol: str = Field(..., min_length=1, max_length=64)
    asset_type: AssetType
    name: Optional[str] = None


class WatchlistItemResponse(BaseModel):
    """Response schema for a watchlist item."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    asset_type: AssetType
    name: Optional[str] = None
