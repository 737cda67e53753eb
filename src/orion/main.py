"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from orion import __version__
from orion.config.settings import get_settings
from orion.config.logging_config import setup_logging
from orion.repositories.sqlalchemy.database import init_db
from orion.api.routers import (
    holdings_router,
    watchlist_router,
    portfolio_router,
    alerts_router,
)
from orion.core.exceptions import AppError, NotFoundError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Multi-asset portfolio valuation: holdings, history, metrics and price alerts",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(holdings_router)
app.include_router(watchlist_router)
app.include_router(portfolio_router)
app.include_router(alerts_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
