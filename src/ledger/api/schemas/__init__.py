"""Pydantic schemas for API request/response."""

from ledger.api.schemas.account import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountRenameRequest,
    AccountResponse,
    AccountListResponse,
)
from ledger.api.schemas.transaction import (
    TransactionCreateRequest,
    InvestmentTransactionRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
)
from ledger.api.schemas.exchange_rate import (
    ExchangeRateSetRequest,
    ExchangeRateResponse,
    ExchangeRateListResponse,
)

__all__ = [
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "AccountRenameRequest",
    "AccountResponse",
    "AccountListResponse",
    "TransactionCreateRequest",
    "InvestmentTransactionRequest",
    "TransactionUpdateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "ExchangeRateSetRequest",
    "ExchangeRateResponse",
    "ExchangeRateListResponse",
]
