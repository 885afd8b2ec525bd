"""Dependency injection for FastAPI."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ledger.config.settings import Settings
from ledger.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from ledger.services import (
    AccountService,
    TransactionService,
    LedgerQueryService,
    ExchangeRateService,
    MarketDataService,
    AccountSummaryService,
)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Provide a session from the store opened at startup."""
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_app_settings(request: Request) -> Settings:
    """Provide the settings resolved at startup."""
    return request.app.state.settings


def get_uow(db: Session = Depends(get_db)) -> SqlAlchemyUnitOfWork:
    """Provide a unit of work bound to the request session."""
    return SqlAlchemyUnitOfWork(db)


def get_market_data_service(request: Request) -> MarketDataService:
    """Provide the shared MarketDataService (its cache outlives requests)."""
    return request.app.state.market_data


def get_account_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(uow, timezone=settings.timezone)


def get_transaction_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
) -> TransactionService:
    """Provide TransactionService instance."""
    return TransactionService(uow)


def get_query_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
) -> LedgerQueryService:
    """Provide LedgerQueryService instance."""
    return LedgerQueryService(uow)


def get_exchange_rate_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
) -> ExchangeRateService:
    """Provide ExchangeRateService instance."""
    return ExchangeRateService(uow)


def get_summary_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    market_data: MarketDataService = Depends(get_market_data_service),
    settings: Settings = Depends(get_app_settings),
) -> AccountSummaryService:
    """Provide AccountSummaryService instance."""
    return AccountSummaryService(
        uow,
        market_data,
        default_target_currency=settings.target_currency,
    )
