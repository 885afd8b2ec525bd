"""Transaction domain model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Transaction:
    """
    Single signed monetary event attributed to one account.

    Positive amounts credit the owning account. A transfer is stored as two
    rows flagged `is_transfer` whose `linked_tx_id` point at each other.
    Investment trades carry ticker/shares/price_per_share/fee; sells store
    negative shares.
    """

    id: Optional[int]
    account_id: int
    date: str
    payee: str
    amount: float
    notes: Optional[str] = None
    category: Optional[str] = None
    ticker: Optional[str] = None
    shares: Optional[float] = None
    price_per_share: Optional[float] = None
    fee: Optional[float] = None
    currency: Optional[str] = None
    linked_tx_id: Optional[int] = None
    is_transfer: bool = False

    @property
    def is_linked(self) -> bool:
        """Return True if this row points at a transfer counterpart."""
        return self.linked_tx_id is not None

    @property
    def is_investment(self) -> bool:
        """Return True if this row records an instrument trade."""
        return self.ticker is not None and self.shares is not None
