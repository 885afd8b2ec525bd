"""Account repository protocol."""

from typing import Protocol, Optional

from ledger.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access. Implementations never commit."""

    def create(self, account: Account) -> Account:
        """Persist a new account and return it with its assigned id."""
        ...

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def find_by_name_casefold(self, name: str) -> Optional[Account]:
        """Retrieve an account whose name matches case-insensitively."""
        ...

    def find_other_by_name(self, name: str, exclude_id: int) -> Optional[Account]:
        """Retrieve an account with exactly this name, other than `exclude_id`."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts ordered by id."""
        ...

    def update(self, account: Account) -> Account:
        """Update name, currency and kind of an existing account."""
        ...

    def add_to_balance(self, account_id: int, delta: float) -> None:
        """Atomically add `delta` to the stored balance."""
        ...

    def delete(self, account_id: int) -> None:
        """Delete an account (hard delete)."""
        ...
