"""Domain models package."""

from ledger.domain.models.enums import (
    SystemCategory,
    AccountKind,
    OPENING_BALANCE_PAYEE,
    OPENING_BALANCE_NOTES,
    BUY_PAYEE,
    SELL_PAYEE,
    USD,
)
from ledger.domain.models.account import Account
from ledger.domain.models.transaction import Transaction
from ledger.domain.models.balances import CurrencySum

__all__ = [
    "SystemCategory",
    "AccountKind",
    "OPENING_BALANCE_PAYEE",
    "OPENING_BALANCE_NOTES",
    "BUY_PAYEE",
    "SELL_PAYEE",
    "USD",
    "Account",
    "Transaction",
    "CurrencySum",
]
