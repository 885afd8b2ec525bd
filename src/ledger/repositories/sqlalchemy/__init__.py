"""SQLAlchemy repository implementations."""

from ledger.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
    open_store,
    close_store,
)
from ledger.repositories.sqlalchemy.migrations import run_migrations, LATEST_VERSION
from ledger.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from ledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from ledger.repositories.sqlalchemy.exchange_rate_repo import SqlAlchemyExchangeRateRepository
from ledger.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "open_store",
    "close_store",
    "run_migrations",
    "LATEST_VERSION",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyExchangeRateRepository",
    "SqlAlchemyUnitOfWork",
]
