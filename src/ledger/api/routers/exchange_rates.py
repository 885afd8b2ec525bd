"""Custom exchange-rate override endpoints."""

from fastapi import APIRouter, Depends, status

from ledger.api.deps import get_exchange_rate_service
from ledger.api.schemas import (
    ExchangeRateSetRequest,
    ExchangeRateResponse,
    ExchangeRateListResponse,
)
from ledger.core.exceptions import NotFoundError
from ledger.services import ExchangeRateService

router = APIRouter(prefix="/exchange-rates", tags=["exchange-rates"])


@router.get("", response_model=ExchangeRateListResponse)
def list_exchange_rates(
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ExchangeRateListResponse:
    rates = service.list_custom_exchange_rates()
    return ExchangeRateListResponse(rates=rates, count=len(rates))


@router.get("/{currency}", response_model=ExchangeRateResponse)
def get_exchange_rate(
    currency: str,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ExchangeRateResponse:
    rate = service.get_custom_exchange_rate(currency)
    if rate is None:
        raise NotFoundError("Exchange rate", currency.strip().upper())
    return ExchangeRateResponse(currency=currency.strip().upper(), rate=rate)


@router.put("/{currency}", response_model=ExchangeRateResponse)
def set_exchange_rate(
    currency: str,
    request: ExchangeRateSetRequest,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ExchangeRateResponse:
    """Set 1 unit of `currency` = `rate` USD."""
    rate = service.set_custom_exchange_rate(currency, request.rate)
    return ExchangeRateResponse(currency=currency.strip().upper(), rate=rate)


@router.delete("/{currency}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exchange_rate(
    currency: str,
    service: ExchangeRateService = Depends(get_exchange_rate_service),
) -> None:
    service.delete_custom_exchange_rate(currency)
