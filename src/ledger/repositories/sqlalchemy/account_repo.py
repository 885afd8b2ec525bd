"""SQLAlchemy implementation of AccountRepository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ledger.core.exceptions import NotFoundError
from ledger.domain.models import Account
from ledger.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            name=account.name,
            balance=account.balance,
            kind=account.kind,
            currency=account.currency,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account by ID."""
        orm_account = self._db.get(AccountORM, account_id)
        return self._to_domain(orm_account) if orm_account else None

    def find_by_name_casefold(self, name: str) -> Optional[Account]:
        orm_account = (
            self._db.query(AccountORM)
            .filter(func.lower(AccountORM.name) == name.lower())
            .order_by(AccountORM.id)
            .first()
        )
        return self._to_domain(orm_account) if orm_account else None

    def find_other_by_name(self, name: str, exclude_id: int) -> Optional[Account]:
        orm_account = (
            self._db.query(AccountORM)
            .filter(AccountORM.name == name, AccountORM.id != exclude_id)
            .order_by(AccountORM.id)
            .first()
        )
        return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.id).all()
        return [self._to_domain(a) for a in orm_accounts]

    def update(self, account: Account) -> Account:
        """Update an existing account."""
        orm_account = self._db.get(AccountORM, account.id)
        if orm_account is None:
            raise NotFoundError("Account", account.id)
        orm_account.name = account.name
        orm_account.currency = account.currency
        orm_account.kind = account.kind
        self._db.flush()
        return self._to_domain(orm_account)

    def add_to_balance(self, account_id: int, delta: float) -> None:
        """Apply a balance delta in SQL so the read-modify-write stays in the store."""
        updated = (
            self._db.query(AccountORM)
            .filter(AccountORM.id == account_id)
            .update(
                {AccountORM.balance: AccountORM.balance + delta},
                synchronize_session="fetch",
            )
        )
        if not updated:
            raise NotFoundError("Account", account_id)

    def delete(self, account_id: int) -> None:
        """Delete an account."""
        self._db.query(AccountORM).filter(AccountORM.id == account_id).delete()
        self._db.flush()

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            id=orm.id,
            name=orm.name,
            balance=orm.balance if orm.balance is not None else 0.0,
            currency=orm.currency,
            kind=orm.kind or "cash",
        )
