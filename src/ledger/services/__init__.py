"""Service layer - business logic."""

from ledger.services.currency_resolver import resolve_rate, rate_pair_id, convert_amount
from ledger.services.balance_aggregator import compute_balances
from ledger.services.transaction_service import (
    TransactionService,
    TransactionCreate,
    InvestmentTransactionCreate,
    TransactionUpdate,
    InvestmentTransactionUpdate,
)
from ledger.services.account_service import AccountService
from ledger.services.query_service import LedgerQueryService
from ledger.services.exchange_rate_service import ExchangeRateService
from ledger.services.market_data_service import MarketDataService
from ledger.services.summary_service import AccountSummaryService

__all__ = [
    "resolve_rate",
    "rate_pair_id",
    "convert_amount",
    "compute_balances",
    "TransactionService",
    "TransactionCreate",
    "InvestmentTransactionCreate",
    "TransactionUpdate",
    "InvestmentTransactionUpdate",
    "AccountService",
    "LedgerQueryService",
    "ExchangeRateService",
    "MarketDataService",
    "AccountSummaryService",
]
