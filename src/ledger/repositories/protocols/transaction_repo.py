"""Transaction repository protocol."""

from typing import Protocol, Optional

from ledger.domain.models import Transaction, CurrencySum


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access. Implementations never commit."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction and return it with its assigned id."""
        ...

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Overwrite every stored field of an existing transaction."""
        ...

    def set_link(self, txn_id: int, linked_tx_id: Optional[int]) -> None:
        """Point one row's link at another row (or clear it)."""
        ...

    def delete(self, txn_id: int) -> None:
        """Delete a single transaction."""
        ...

    def delete_by_account(self, account_id: int) -> int:
        """Delete every transaction owned by an account; return the count."""
        ...

    def list_by_account(self, account_id: int) -> list[Transaction]:
        """List an account's transactions, newest first (date desc, id desc)."""
        ...

    def list_all(self) -> list[Transaction]:
        """List all transactions, newest first (date desc, id desc)."""
        ...

    def find_unlinked_transfers_by_notes(
        self,
        notes: str,
        exclude_id: int,
    ) -> list[Transaction]:
        """Transfer rows without a link whose notes equal `notes` exactly."""
        ...

    def list_external_counterpart_ids(self, account_id: int) -> list[int]:
        """Ids of rows outside the account that are linked to rows inside it."""
        ...

    def sum_by_account_and_currency(self) -> list[CurrencySum]:
        """SUM(amount) grouped by account and transaction currency."""
        ...

    def distinct_payees(self) -> list[str]:
        """Distinct payees, alphabetical."""
        ...

    def distinct_categories(self) -> list[str]:
        """Distinct categories of non-transfer rows, alphabetical."""
        ...
