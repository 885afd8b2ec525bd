"""Exchange-rate provider protocol."""

from typing import Protocol, Optional


class RateProvider(Protocol):
    """
    Protocol for exchange-rate sources.

    A pair id is ``SRC + DST + "=X"`` and the returned rate means
    1 SRC = rate DST. Implementations may block on I/O; the market data
    service calls them from worker threads with a timeout.
    """

    def get_rate(self, pair_id: str) -> Optional[float]:
        """Return the current rate for a pair, or None if it is unknown."""
        ...
