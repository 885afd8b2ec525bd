"""Enumerations and fixed values for domain models."""

from enum import Enum


class SystemCategory(str, Enum):
    """Categories the ledger assigns itself; never chosen by the user."""

    TRANSFER = "Transfer"
    INCOME = "Income"
    INVESTMENT = "Investment"


class AccountKind(str, Enum):
    """Default account kind; the stored kind is free text."""

    CASH = "cash"


OPENING_BALANCE_PAYEE = "Opening Balance"
OPENING_BALANCE_NOTES = "Initial Balance"

BUY_PAYEE = "Buy"
SELL_PAYEE = "Sell"

USD = "USD"
