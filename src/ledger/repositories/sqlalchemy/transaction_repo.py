"""SQLAlchemy implementation of TransactionRepository."""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ledger.core.exceptions import NotFoundError
from ledger.domain.models import Transaction, CurrencySum
from ledger.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = TransactionORM()
        self._apply(orm_txn, transaction)
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.get(TransactionORM, txn_id)
        return self._to_domain(orm_txn) if orm_txn else None

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        orm_txn = self._db.get(TransactionORM, transaction.id)
        if orm_txn is None:
            raise NotFoundError("Transaction", transaction.id)
        self._apply(orm_txn, transaction)
        self._db.flush()
        return self._to_domain(orm_txn)

    def set_link(self, txn_id: int, linked_tx_id: Optional[int]) -> None:
        orm_txn = self._db.get(TransactionORM, txn_id)
        if orm_txn is None:
            raise NotFoundError("Transaction", txn_id)
        orm_txn.linked_tx_id = linked_tx_id
        self._db.flush()

    def delete(self, txn_id: int) -> None:
        """Delete a transaction."""
        self._db.query(TransactionORM).filter(TransactionORM.id == txn_id).delete()
        self._db.flush()

    def delete_by_account(self, account_id: int) -> int:
        deleted = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.account_id == account_id)
            .delete()
        )
        self._db.flush()
        return deleted

    def list_by_account(self, account_id: int) -> list[Transaction]:
        """List transactions for an account."""
        orm_txns = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.account_id == account_id)
            .order_by(TransactionORM.date.desc(), TransactionORM.id.desc())
            .all()
        )
        return [self._to_domain(t) for t in orm_txns]

    def list_all(self) -> list[Transaction]:
        """List all transactions."""
        orm_txns = (
            self._db.query(TransactionORM)
            .order_by(TransactionORM.date.desc(), TransactionORM.id.desc())
            .all()
        )
        return [self._to_domain(t) for t in orm_txns]

    def find_unlinked_transfers_by_notes(
        self,
        notes: str,
        exclude_id: int,
    ) -> list[Transaction]:
        orm_txns = (
            self._db.query(TransactionORM)
            .filter(
                TransactionORM.id != exclude_id,
                TransactionORM.is_transfer.is_(True),
                TransactionORM.linked_tx_id.is_(None),
                TransactionORM.notes == notes,
            )
            .order_by(TransactionORM.id)
            .all()
        )
        return [self._to_domain(t) for t in orm_txns]

    def list_external_counterpart_ids(self, account_id: int) -> list[int]:
        inside_ids = (
            self._db.query(TransactionORM.id)
            .filter(TransactionORM.account_id == account_id)
            .scalar_subquery()
        )
        inside_links = (
            self._db.query(TransactionORM.linked_tx_id)
            .filter(
                TransactionORM.account_id == account_id,
                TransactionORM.linked_tx_id.is_not(None),
            )
            .scalar_subquery()
        )
        rows = (
            self._db.query(TransactionORM.id)
            .filter(
                TransactionORM.account_id != account_id,
                or_(
                    TransactionORM.linked_tx_id.in_(inside_ids),
                    TransactionORM.id.in_(inside_links),
                ),
            )
            .order_by(TransactionORM.id)
            .all()
        )
        return [row.id for row in rows]

    def sum_by_account_and_currency(self) -> list[CurrencySum]:
        rows = (
            self._db.query(
                TransactionORM.account_id,
                TransactionORM.currency,
                func.sum(TransactionORM.amount).label("total"),
            )
            .group_by(TransactionORM.account_id, TransactionORM.currency)
            .order_by(TransactionORM.account_id)
            .all()
        )
        return [
            CurrencySum(
                account_id=row.account_id,
                currency=row.currency,
                amount=float(row.total or 0.0),
            )
            for row in rows
        ]

    def distinct_payees(self) -> list[str]:
        rows = (
            self._db.query(TransactionORM.payee)
            .distinct()
            .order_by(TransactionORM.payee)
            .all()
        )
        return [row.payee for row in rows]

    def distinct_categories(self) -> list[str]:
        rows = (
            self._db.query(TransactionORM.category)
            .filter(
                TransactionORM.category.is_not(None),
                TransactionORM.is_transfer.is_(False),
            )
            .distinct()
            .order_by(TransactionORM.category)
            .all()
        )
        return [row.category for row in rows]

    @staticmethod
    def _apply(orm: TransactionORM, txn: Transaction) -> None:
        orm.account_id = txn.account_id
        orm.date = txn.date
        orm.payee = txn.payee
        orm.notes = txn.notes
        orm.category = txn.category
        orm.amount = txn.amount
        orm.ticker = txn.ticker
        orm.shares = txn.shares
        orm.price_per_share = txn.price_per_share
        orm.fee = txn.fee
        orm.currency = txn.currency
        orm.linked_tx_id = txn.linked_tx_id
        orm.is_transfer = txn.is_transfer

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            id=orm.id,
            account_id=orm.account_id,
            date=orm.date,
            payee=orm.payee,
            amount=orm.amount,
            notes=orm.notes,
            category=orm.category,
            ticker=orm.ticker,
            shares=orm.shares,
            price_per_share=orm.price_per_share,
            fee=orm.fee,
            currency=orm.currency,
            linked_tx_id=orm.linked_tx_id,
            is_transfer=bool(orm.is_transfer),
        )
