"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ledger import __version__
from ledger.config.settings import get_settings
from ledger.config.logging_config import setup_logging
from ledger.repositories.sqlalchemy.database import open_store, close_store
from ledger.providers import StaticRateProvider
from ledger.services import MarketDataService
from ledger.api.routers import (
    accounts_router,
    transactions_router,
    ledger_router,
    exchange_rates_router,
)
from ledger.core.exceptions import AppError, ValidationError, NotFoundError, StoreError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: settings are resolved once and the store is opened from them
    settings = get_settings()
    setup_logging(settings)
    engine, session_factory = open_store(settings)
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.market_data = MarketDataService(
        provider=StaticRateProvider(),
        cache_ttl_seconds=settings.rate_cache_ttl_seconds,
        fetch_timeout_seconds=settings.rate_fetch_timeout_seconds,
        max_workers=settings.rate_fetch_max_workers,
    )
    yield
    # Shutdown
    app.state.market_data.close()
    close_store(engine)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Local-first personal finance ledger with transfers and multi-currency balances",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(transactions_router)
app.include_router(ledger_router)
app.include_router(exchange_rates_router)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, StoreError):
        return 500
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_status_for(exc),
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
