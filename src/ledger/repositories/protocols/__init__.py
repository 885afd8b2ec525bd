"""Repository protocol definitions (interfaces)."""

from ledger.repositories.protocols.account_repo import AccountRepository
from ledger.repositories.protocols.transaction_repo import TransactionRepository
from ledger.repositories.protocols.exchange_rate_repo import ExchangeRateRepository
from ledger.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "ExchangeRateRepository",
    "UnitOfWork",
]
