"""Pydantic schemas for exchange-rate override endpoints."""

from pydantic import BaseModel, Field


class ExchangeRateSetRequest(BaseModel):
    """1 unit of the path currency = rate USD."""

    rate: float = Field(..., description="Units of USD per unit of currency")


class ExchangeRateResponse(BaseModel):
    currency: str
    rate: float


class ExchangeRateListResponse(BaseModel):
    rates: dict[str, float]
    count: int
