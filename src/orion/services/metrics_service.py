"""Metrics service for point-in-time portfolio figures."""

from dataclasses import dataclass, field
from typing import Optional

from orion.domain.models import AssetType, Holding
from orion.domain.views import HoldingWithPrice, PortfolioMetrics, Quote
from orion.repositories.protocols import HoldingRepository
from orion.services.market_data_service import MarketDataService


def _pct(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is not positive."""
    return part / whole * 100 if whole > 0 else 0.0


def calculate_pl(holding: Holding, current_price: float) -> tuple[float, float]:
    """Return (pl_usd, pl_pct) for a holding at a given price."""
    cost_basis = holding.quantity * holding.purchase_price
    current_value = holding.quantity * current_price
    pl_usd = current_value - cost_basis
    return pl_usd, _pct(pl_usd, cost_basis)


def enrich_holding_with_price(
    holding: Holding,
    current_price: float,
    has_live_price: bool = True,
) -> HoldingWithPrice:
    """Enrich holding with current price and P/L data."""
    pl_usd, pl_pct = calculate_pl(holding, current_price)
    return HoldingWithPrice(
        holding=holding,
        current_price=current_price,
        current_value=holding.quantity * current_price,
        pl_usd=pl_usd,
        pl_pct=pl_pct,
        has_live_price=has_live_price,
    )


def calculate_portfolio_metrics(holdings: list[HoldingWithPrice]) -> PortfolioMetrics:
    """
    Aggregate totals and the stock/crypto split.

    Percentages are 0 whenever their denominator is 0, so an empty portfolio
    yields all-zero metrics.
    """
    total_value = 0.0
    total_cost_basis = 0.0
    stock_value = 0.0
    crypto_value = 0.0

    for h in holdings:
        total_value += h.current_value
        total_cost_basis += h.holding.cost_basis
        if h.asset_type == AssetType.STOCK:
            stock_value += h.current_value
        else:
            crypto_value += h.current_value

    total_pl = total_value - total_cost_basis
    return PortfolioMetrics(
        total_value=total_value,
        total_cost_basis=total_cost_basis,
        total_pl=total_pl,
        total_pl_pct=_pct(total_pl, total_cost_basis),
        stock_value=stock_value,
        crypto_value=crypto_value,
        stock_pct=_pct(stock_value, total_value),
        crypto_pct=_pct(crypto_value, total_value),
    )


@dataclass
class PortfolioSnapshot:
    """Holdings priced at live quotes plus their aggregate metrics."""

    holdings: list[HoldingWithPrice] = field(default_factory=list)
    metrics: PortfolioMetrics = field(default_factory=PortfolioMetrics)
    is_error: bool = False
    missing_quotes: list[str] = field(default_factory=list)


class MetricsService:
    """
    Service for dashboard summary figures.

    Joins holdings with live quotes. A holding without a quote is valued at its
    purchase price so the totals do not drop to 0 while quotes load.
    """

    def __init__(
        self,
        holding_repo: HoldingRepository,
        market_data_service: MarketDataService,
    ):
        self._holding_repo = holding_repo
        self._market = market_data_service

    def get_metrics(self, holdings: Optional[list[Holding]] = None) -> PortfolioMetrics:
        return self.get_snapshot(holdings).metrics

    def get_snapshot(self, holdings: Optional[list[Holding]] = None) -> PortfolioSnapshot:
        """Price every holding and aggregate."""
        if holdings is None:
            holdings = self._holding_repo.list_all()
        if not holdings:
            return PortfolioSnapshot()

        quotes = self._market.get_quotes([(h.lookup_symbol, h.asset_type) for h in holdings])

        priced: list[HoldingWithPrice] = []
        missing: list[str] = []
        for holding in holdings:
            quote: Optional[Quote] = quotes.get((holding.lookup_symbol, holding.asset_type))
            if quote is not None and quote.current_price:
                priced.append(enrich_holding_with_price(holding, quote.current_price))
            else:
                if holding.lookup_symbol not in missing:
                    missing.append(holding.lookup_symbol)
                priced.append(
                    enrich_holding_with_price(holding, holding.purchase_price, has_live_price=False)
                )

        return PortfolioSnapshot(
            holdings=priced,
            metrics=calculate_portfolio_metrics(priced),
            is_error=bool(missing),
            missing_quotes=missing,
        )
