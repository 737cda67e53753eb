"""Price alert endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from orion.api.deps import get_price_alert_service, set_alert_threshold
from orion.api.schemas import AlertCheckResponse, PriceAlertResponse
from orion.services import PriceAlertService

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.post("/check", response_model=AlertCheckResponse)
def check_alerts(
    threshold_pct: Optional[float] = Query(None, description="Override threshold (clamped to 0.1-100)"),
    service: PriceAlertService = Depends(get_price_alert_service),
) -> AlertCheckResponse:
    """Detect significant watchlist moves and deliver new alerts."""
    if threshold_pct is not None:
        set_alert_threshold(service.set_threshold(threshold_pct))

    result = service.process_alerts()
    return AlertCheckResponse(
        alerts=[
            PriceAlertResponse(
                symbol=a.symbol,
                name=a.name,
                change_pct=a.change_pct,
                current_price=a.current_price,
                direction=a.direction,
                asset_type=a.asset_type,
            )
            for a in result.alerts
        ],
        sent_count=result.sent_count,
        threshold_pct=service.threshold_pct,
    )


@router.post("/reset", status_code=204)
def reset_alerts(
    service: PriceAlertService = Depends(get_price_alert_service),
) -> None:
    """Forget which symbols were already notified."""
    service.reset_notified_symbols()
