"""SQLAlchemy implementation of ExchangeRateRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from ledger.repositories.sqlalchemy.orm_models import CustomExchangeRateORM


class SqlAlchemyExchangeRateRepository:
    """SQLAlchemy-backed store of user-supplied currency-to-USD rates."""

    def __init__(self, db: Session):
        self._db = db

    def upsert(self, currency: str, rate: float) -> None:
        orm_rate = self._db.get(CustomExchangeRateORM, currency)
        if orm_rate is None:
            self._db.add(CustomExchangeRateORM(currency=currency, rate=rate))
        else:
            orm_rate.rate = rate
        self._db.flush()

    def get(self, currency: str) -> Optional[float]:
        orm_rate = self._db.get(CustomExchangeRateORM, currency)
        return orm_rate.rate if orm_rate else None

    def list_all(self) -> dict[str, float]:
        rows = (
            self._db.query(CustomExchangeRateORM)
            .order_by(CustomExchangeRateORM.currency)
            .all()
        )
        return {row.currency: row.rate for row in rows}

    def delete(self, currency: str) -> bool:
        deleted = (
            self._db.query(CustomExchangeRateORM)
            .filter(CustomExchangeRateORM.currency == currency)
            .delete()
        )
        self._db.flush()
        return bool(deleted)
