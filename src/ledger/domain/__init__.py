"""Domain layer - pure business models with no external dependencies."""

from ledger.domain.models import (
    Account,
    Transaction,
    CurrencySum,
    SystemCategory,
    AccountKind,
)

__all__ = [
    "Account",
    "Transaction",
    "CurrencySum",
    "SystemCategory",
    "AccountKind",
]
