"""Read-only ledger queries."""

from ledger.core.exceptions import NotFoundError
from ledger.domain.models import Transaction
from ledger.repositories.protocols import UnitOfWork


class LedgerQueryService:
    """Lists transactions, payees and categories. Never writes."""

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    def list_transactions(self, account_id: int) -> list[Transaction]:
        """Transactions of one account, newest first; empty for unknown accounts."""
        with self._uow.transaction() as uow:
            return uow.transactions.list_by_account(account_id)

    def list_all_transactions(self) -> list[Transaction]:
        """Every transaction, newest first."""
        with self._uow.transaction() as uow:
            return uow.transactions.list_all()

    def get_transaction(self, txn_id: int) -> Transaction:
        with self._uow.transaction() as uow:
            txn = uow.transactions.get_by_id(txn_id)
            if txn is None:
                raise NotFoundError("Transaction", txn_id)
            return txn

    def list_payees(self) -> list[str]:
        """Distinct payees, alphabetical."""
        with self._uow.transaction() as uow:
            return uow.transactions.distinct_payees()

    def list_categories(self) -> list[str]:
        """Distinct categories in use, excluding transfer rows."""
        with self._uow.transaction() as uow:
            return uow.transactions.distinct_categories()
