"""
Unit tests for ExchangeRateService.

Tests cover:
- Setting, reading, listing and deleting overrides
- Currency normalization and rate validation
"""

import math

import pytest

from ledger.core.exceptions import ValidationError, NotFoundError


class TestCustomExchangeRates:
    """Tests for override rate management."""

    def test_set_and_get(self, exchange_rate_service):
        """
        GIVEN no overrides
        WHEN I set chf to 1.12
        THEN it is stored under CHF
        """
        exchange_rate_service.set_custom_exchange_rate("chf", 1.12)

        assert exchange_rate_service.get_custom_exchange_rate("CHF") == pytest.approx(1.12)
        assert exchange_rate_service.get_custom_exchange_rate(" chf ") == pytest.approx(1.12)

    def test_set_replaces_existing(self, exchange_rate_service):
        exchange_rate_service.set_custom_exchange_rate("ARS", 0.002)
        exchange_rate_service.set_custom_exchange_rate("ARS", 0.001)

        assert exchange_rate_service.list_custom_exchange_rates() == {"ARS": pytest.approx(0.001)}

    def test_get_missing_returns_none(self, exchange_rate_service):
        assert exchange_rate_service.get_custom_exchange_rate("SEK") is None

    def test_list(self, exchange_rate_service):
        exchange_rate_service.set_custom_exchange_rate("SEK", 0.095)
        exchange_rate_service.set_custom_exchange_rate("NOK", 0.093)

        rates = exchange_rate_service.list_custom_exchange_rates()

        assert set(rates) == {"SEK", "NOK"}

    @pytest.mark.parametrize("rate", [0.0, -1.0, math.inf, math.nan, "abc"])
    def test_invalid_rate_rejected(self, exchange_rate_service, rate):
        with pytest.raises(ValidationError):
            exchange_rate_service.set_custom_exchange_rate("SEK", rate)

    @pytest.mark.parametrize("currency", ["", "EURO", "E1R", None])
    def test_invalid_currency_rejected(self, exchange_rate_service, currency):
        with pytest.raises(ValidationError):
            exchange_rate_service.set_custom_exchange_rate(currency, 1.0)

    def test_delete(self, exchange_rate_service):
        exchange_rate_service.set_custom_exchange_rate("SEK", 0.095)

        exchange_rate_service.delete_custom_exchange_rate("sek")

        assert exchange_rate_service.get_custom_exchange_rate("SEK") is None

    def test_delete_missing_raises(self, exchange_rate_service):
        with pytest.raises(NotFoundError):
            exchange_rate_service.delete_custom_exchange_rate("SEK")
