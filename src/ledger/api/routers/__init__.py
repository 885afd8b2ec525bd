"""API routers package."""

from ledger.api.routers.accounts import router as accounts_router
from ledger.api.routers.transactions import router as transactions_router
from ledger.api.routers.ledger import router as ledger_router
from ledger.api.routers.exchange_rates import router as exchange_rates_router

__all__ = [
    "accounts_router",
    "transactions_router",
    "ledger_router",
    "exchange_rates_router",
]
