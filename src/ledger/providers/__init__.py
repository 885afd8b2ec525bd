"""Exchange-rate providers module."""

from ledger.providers.rate_provider import RateProvider
from ledger.providers.static_provider import StaticRateProvider

__all__ = [
    "RateProvider",
    "StaticRateProvider",
]
