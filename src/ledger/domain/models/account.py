"""Account domain model."""

from dataclasses import dataclass
from typing import Optional

from ledger.domain.models.enums import AccountKind


@dataclass
class Account:
    """
    Named money container.

    `balance` is denominated in the account's own currency; an account without
    a currency uses the global target currency. `exchange_rate` is derived on
    read relative to a requested target currency and never stored.
    """

    id: Optional[int]
    name: str
    balance: float = 0.0
    currency: Optional[str] = None
    kind: str = AccountKind.CASH.value
    exchange_rate: float = 1.0
