"""Custom exchange rate repository protocol."""

from typing import Protocol, Optional


class ExchangeRateRepository(Protocol):
    """Interface for user-supplied currency-to-USD override rates."""

    def upsert(self, currency: str, rate: float) -> None:
        """Insert or replace the override for a currency."""
        ...

    def get(self, currency: str) -> Optional[float]:
        """Return the override for a currency, if any."""
        ...

    def list_all(self) -> dict[str, float]:
        """Return every override keyed by currency."""
        ...

    def delete(self, currency: str) -> bool:
        """Remove an override; return False if there was none."""
        ...
