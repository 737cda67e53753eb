"""API routers package."""

from orion.api.routers.holdings import router as holdings_router
from orion.api.routers.watchlist import router as watchlist_router
from orion.api.routers.portfolio import router as portfolio_router
from orion.api.routers.alerts import router as alerts_router

__all__ = [
    "holdings_router",
    "watchlist_router",
    "portfolio_router",
    "alerts_router",
]
