"""Application context for in-process service management.

Provides access to all ledger services without HTTP. The context owns
one engine and hands each service a fresh unit of work.
"""

from pathlib import Path
from typing import Optional

from ledger.config.settings import Settings
from ledger.config.logging_config import setup_logging
from ledger.providers import RateProvider, StaticRateProvider
from ledger.repositories.sqlalchemy import SqlAlchemyUnitOfWork, open_store, close_store
from ledger.services import (
    AccountService,
    TransactionService,
    LedgerQueryService,
    ExchangeRateService,
    MarketDataService,
    AccountSummaryService,
)


class LedgerContext:
    """
    In-process entry point to the ledger.

    Usage:
        with LedgerContext(Settings(data_dir=Path("/tmp/books"))) as ctx:
            account = ctx.accounts.create_account("Checking", 100.0)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rate_provider: Optional[RateProvider] = None,
        configure_logging: bool = False,
    ):
        self.settings = settings or Settings()
        if configure_logging:
            setup_logging(self.settings)
        self._engine, self._session_factory = open_store(self.settings)
        self._uow = SqlAlchemyUnitOfWork(self._session_factory())
        self.market_data = MarketDataService(
            provider=rate_provider or StaticRateProvider(),
            cache_ttl_seconds=self.settings.rate_cache_ttl_seconds,
            fetch_timeout_seconds=self.settings.rate_fetch_timeout_seconds,
            max_workers=self.settings.rate_fetch_max_workers,
        )
        self.accounts = AccountService(self._uow, timezone=self.settings.timezone)
        self.transactions = TransactionService(self._uow)
        self.queries = LedgerQueryService(self._uow)
        self.exchange_rates = ExchangeRateService(self._uow)
        self.summary = AccountSummaryService(
            self._uow,
            self.market_data,
            default_target_currency=self.settings.target_currency,
        )

    @classmethod
    def for_data_dir(cls, data_dir: Path, **kwargs) -> "LedgerContext":
        """Open the ledger stored under `data_dir`."""
        return cls(Settings(data_dir=data_dir), **kwargs)

    def close(self) -> None:
        """Stop rate fetching, close the session and dispose of the engine."""
        self.market_data.close()
        self._uow.close()
        close_store(self._engine)

    def __enter__(self) -> "LedgerContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
