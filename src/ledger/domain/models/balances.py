"""Raw aggregation rows consumed by the balance aggregator."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CurrencySum:
    """Sum of an account's transaction amounts in one currency (None = unspecified)."""

    account_id: int
    currency: Optional[str]
    amount: float
