"""Repository layer - data access abstractions and implementations."""

from ledger.repositories.protocols import (
    AccountRepository,
    TransactionRepository,
    ExchangeRateRepository,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "ExchangeRateRepository",
    "UnitOfWork",
]
