"""Pydantic schemas for transaction endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TransactionCreateRequest(BaseModel):
    """Request schema for creating a transaction."""

    account_id: int = Field(..., description="Owning account ID")
    date: str = Field(..., description="ISO 8601 date, e.g. 2024-03-01")
    payee: str = Field(..., description="Payee; another account's exact name makes a transfer")
    amount: float = Field(..., description="Signed amount; positive credits the account")
    notes: Optional[str] = Field(default=None, max_length=500)
    category: Optional[str] = None
    ticker: Optional[str] = Field(default=None, max_length=20)
    shares: Optional[float] = None
    price_per_share: Optional[float] = None
    fee: Optional[float] = None
    currency: Optional[str] = None

    @field_validator("ticker")
    @classmethod
    def uppercase_ticker(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else None


class InvestmentTransactionRequest(BaseModel):
    """Request schema for recording a buy or sell."""

    account_id: int
    date: str
    ticker: str = Field(..., max_length=20)
    shares: float = Field(..., description="Number of shares, always positive")
    price_per_share: float
    fee: float = 0.0
    is_buy: bool = True
    notes: Optional[str] = Field(default=None, max_length=500, description="Used on update only")
    currency: Optional[str] = None


class TransactionUpdateRequest(BaseModel):
    """Request schema for replacing a transaction's fields."""

    account_id: int
    date: str
    payee: str
    amount: float
    notes: Optional[str] = Field(default=None, max_length=500)
    category: Optional[str] = None
    currency: Optional[str] = None


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    id: int
    account_id: int
    date: str
    payee: str
    amount: float
    notes: Optional[str] = None
    category: Optional[str] = None
    ticker: Optional[str] = None
    shares: Optional[float] = None
    price_per_share: Optional[float] = None
    fee: Optional[float] = None
    currency: Optional[str] = None
    linked_tx_id: Optional[int] = None
    is_transfer: bool = False


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int
