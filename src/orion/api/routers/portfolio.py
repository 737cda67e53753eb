"""Portfolio valuation endpoints."""

from fastapi import APIRouter, Depends, Query

from orion.api.deps import get_metrics_service, get_valuation_service
from orion.api.schemas import (
    HoldingWithPriceResponse,
    PortfolioMetricsResponse,
    PortfolioHoldingsResponse,
    ValuationPointResponse,
    HistoricalValuationResponse,
)
from orion.domain.models import HistoricalRange
from orion.domain.views import HoldingWithPrice
from orion.services import MetricsService, ValuationService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def _holding_response(h: HoldingWithPrice) -> HoldingWithPriceResponse:
    return HoldingWithPriceResponse(
        id=h.holding.id,
        symbol=h.symbol,
        asset_type=h.asset_type,
        quantity=h.holding.quantity,
        purchase_price=h.holding.purchase_price,
        purchase_date=h.holding.purchase_date,
        current_price=h.current_price,
        current_value=h.current_value,
        pl_usd=h.pl_usd,
        pl_pct=h.pl_pct,
        has_live_price=h.has_live_price,
    )


@router.get("/metrics", response_model=PortfolioMetricsResponse)
def get_metrics(
    metrics_service: MetricsService = Depends(get_metrics_service),
) -> PortfolioMetricsResponse:
    """Current total value, P/L and stock/crypto allocation."""
    snapshot = metrics_service.get_snapshot()
    m = snapshot.metrics
    return PortfolioMetricsResponse(
        total_value=m.total_value,
        total_cost_basis=m.total_cost_basis,
        total_pl=m.total_pl,
        total_pl_pct=m.total_pl_pct,
        stock_value=m.stock_value,
        crypto_value=m.crypto_value,
        stock_pct=m.stock_pct,
        crypto_pct=m.crypto_pct,
        is_error=snapshot.is_error,
        missing_quotes=snapshot.missing_quotes,
    )


@router.get("/holdings", response_model=PortfolioHoldingsResponse)
def get_holdings_with_prices(
    metrics_service: MetricsService = Depends(get_metrics_service),
) -> PortfolioHoldingsResponse:
    """Holdings priced at live quotes."""
    snapshot = metrics_service.get_snapshot()
    return PortfolioHoldingsResponse(
        holdings=[_holding_response(h) for h in snapshot.holdings],
        is_error=snapshot.is_error,
    )


@router.get("/history", response_model=HistoricalValuationResponse)
def get_history(
    history_range: HistoricalRange = Query(
        HistoricalRange.MONTH, alias="range", description="7d, 30d, 90d or 1y"
    ),
    valuation_service: ValuationService = Depends(get_valuation_service),
) -> HistoricalValuationResponse:
    """Total portfolio value per calendar date over the selected range."""
    valuation = valuation_service.get_historical_valuation(history_range)
    return HistoricalValuationResponse(
        range=history_range.value,
        data=[ValuationPointResponse(date=p.date, value=p.value) for p in valuation.points],
        is_error=valuation.is_error,
        error=valuation.error,
        missing_symbols=valuation.missing_symbols,
    )
