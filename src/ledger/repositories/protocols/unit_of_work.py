"""Unit of work protocol."""

from contextlib import AbstractContextManager
from typing import Protocol

from ledger.repositories.protocols.account_repo import AccountRepository
from ledger.repositories.protocols.transaction_repo import TransactionRepository
from ledger.repositories.protocols.exchange_rate_repo import ExchangeRateRepository


class UnitOfWork(Protocol):
    """
    Groups repository calls into one atomic store transaction.

    Usage:
        with uow.transaction():
            uow.transactions.create(...)
            uow.accounts.add_to_balance(...)

    Leaving the block normally commits; any exception rolls everything back.
    """

    accounts: AccountRepository
    transactions: TransactionRepository
    exchange_rates: ExchangeRateRepository

    def transaction(self) -> AbstractContextManager["UnitOfWork"]:
        """Open an atomic unit; commit on success, roll back on error."""
        ...
