"""User-supplied currency-to-USD override rates."""

import logging
import math
from typing import Optional

from ledger.core.exceptions import ValidationError, NotFoundError
from ledger.core.normalize import normalize_currency
from ledger.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)


def _currency_code(currency: Optional[str]) -> str:
    try:
        code = normalize_currency(currency)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if code is None:
        raise ValidationError("Currency is required")
    return code


class ExchangeRateService:
    """
    Manages override rates (1 unit of currency = rate USD).

    Overrides take precedence over live pivot quotes during conversion.
    """

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    def set_custom_exchange_rate(self, currency: str, rate: float) -> float:
        """Insert or replace an override; returns the stored rate."""
        code = _currency_code(currency)
        try:
            value = float(rate)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Exchange rate must be a number: {rate!r}") from e
        if not math.isfinite(value) or value <= 0:
            raise ValidationError(f"Exchange rate must be a positive number: {rate!r}")

        with self._uow.transaction() as uow:
            uow.exchange_rates.upsert(code, value)
        logger.info("Set custom exchange rate %s = %s USD", code, value)
        return value

    def get_custom_exchange_rate(self, currency: str) -> Optional[float]:
        code = _currency_code(currency)
        with self._uow.transaction() as uow:
            return uow.exchange_rates.get(code)

    def list_custom_exchange_rates(self) -> dict[str, float]:
        with self._uow.transaction() as uow:
            return uow.exchange_rates.list_all()

    def delete_custom_exchange_rate(self, currency: str) -> None:
        code = _currency_code(currency)
        with self._uow.transaction() as uow:
            if not uow.exchange_rates.delete(code):
                raise NotFoundError("Exchange rate", code)
        logger.info("Removed custom exchange rate for %s", code)
