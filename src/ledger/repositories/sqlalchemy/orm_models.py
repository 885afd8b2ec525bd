"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Float,
    Boolean,
    ForeignKey,
)
from sqlalchemy.orm import relationship

from ledger.repositories.sqlalchemy.database import Base


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    balance = Column(Float, nullable=False, default=0.0)
    kind = Column(Text, default="cash")
    currency = Column(Text, nullable=True)

    transactions = relationship("TransactionORM", back_populates="account")


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(Text, nullable=False)
    payee = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    category = Column(Text, nullable=True)
    amount = Column(Float, nullable=False)
    ticker = Column(Text, nullable=True)
    shares = Column(Float, nullable=True)
    price_per_share = Column(Float, nullable=True)
    fee = Column(Float, nullable=True)
    linked_tx_id = Column(Integer, nullable=True)
    currency = Column(Text, nullable=True)
    is_transfer = Column(Boolean, nullable=False, default=False)

    account = relationship("AccountORM", back_populates="transactions")


class CustomExchangeRateORM(Base):
    """SQLAlchemy model for a user-supplied currency-to-USD rate."""

    __tablename__ = "custom_exchange_rates"

    currency = Column(String(3), primary_key=True)
    rate = Column(Float, nullable=False)
