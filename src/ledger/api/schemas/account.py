"""Pydantic schemas for account endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class AccountCreateRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., max_length=255, description="Account name, unique ignoring case")
    opening_balance: float = Field(default=0.0, description="Recorded as an opening-balance entry")
    currency: Optional[str] = Field(default=None, description="3-letter code; omit for the target currency")
    kind: str = Field(default="cash", description="Free-text account kind")


class AccountUpdateRequest(BaseModel):
    """Request schema for updating an account's name and currency."""

    name: str = Field(..., max_length=255)
    currency: Optional[str] = None
    kind: Optional[str] = None


class AccountRenameRequest(BaseModel):
    """Request schema for renaming an account."""

    name: str = Field(..., max_length=255)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    balance: float
    currency: Optional[str] = None
    kind: str
    exchange_rate: float = 1.0


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int
    target_currency: str
