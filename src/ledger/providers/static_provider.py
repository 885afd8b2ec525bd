"""Static exchange-rate provider for offline/testing use."""

from typing import Mapping, Optional


# Approximate reference rates so an offline install still converts sensibly
_DEFAULT_RATES: dict[str, float] = {
    "EURUSD=X": 1.08,
    "GBPUSD=X": 1.27,
    "JPYUSD=X": 0.0067,
    "CADUSD=X": 0.73,
    "AUDUSD=X": 0.66,
    "CHFUSD=X": 1.12,
    "CNYUSD=X": 0.14,
}


class StaticRateProvider:
    """Serves rates from a fixed mapping; unknown pairs yield None."""

    def __init__(self, rates: Optional[Mapping[str, float]] = None):
        self._rates = dict(_DEFAULT_RATES if rates is None else rates)

    def get_rate(self, pair_id: str) -> Optional[float]:
        return self._rates.get(pair_id.upper())
