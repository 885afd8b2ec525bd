"""Account manager: create, rename, update and delete accounts."""

import logging
import sys
from typing import Callable, Optional

from ledger.core.clock import today_iso
from ledger.core.exceptions import ValidationError, NotFoundError
from ledger.core.normalize import normalize_currency
from ledger.domain.models import (
    Account,
    AccountKind,
    Transaction,
    SystemCategory,
    OPENING_BALANCE_PAYEE,
    OPENING_BALANCE_NOTES,
)
from ledger.repositories.protocols import UnitOfWork
from ledger.services.transaction_service import post_entry

logger = logging.getLogger(__name__)

EPSILON = sys.float_info.epsilon


class AccountService:
    """
    Service for managing accounts.

    Names are trimmed and unique case-insensitively. Deleting an account
    removes its transactions and unlinks transfer rows left on other accounts.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        timezone: str = "UTC",
        today: Optional[Callable[[], str]] = None,
    ):
        self._uow = uow
        self._today = today or (lambda: today_iso(timezone))

    def create_account(
        self,
        name: str,
        opening_balance: float = 0.0,
        currency: Optional[str] = None,
        kind: str = AccountKind.CASH.value,
    ) -> Account:
        """
        Create an account, optionally seeded with an opening balance.

        Args:
            name: Display name, unique ignoring case
            opening_balance: Non-zero amount recorded as an "Opening Balance" entry
            currency: Optional 3-letter code; None means the target currency
            kind: Free-text account kind

        Returns:
            Created Account with exchange_rate 1.0

        Raises:
            ValidationError: Empty or duplicate name, or bad currency
        """
        clean_name = self._validate_name(name)
        currency = self._validate_currency(currency)

        with self._uow.transaction() as uow:
            self._ensure_unique(uow, clean_name)
            account = uow.accounts.create(
                Account(
                    id=None,
                    name=clean_name,
                    balance=0.0,
                    currency=currency,
                    kind=kind or AccountKind.CASH.value,
                )
            )
            if abs(opening_balance) > EPSILON:
                post_entry(
                    uow,
                    Transaction(
                        id=None,
                        account_id=account.id,
                        date=self._today(),
                        payee=OPENING_BALANCE_PAYEE,
                        amount=opening_balance,
                        notes=OPENING_BALANCE_NOTES,
                        category=SystemCategory.INCOME.value,
                        currency=currency,
                    ),
                )
                account.balance = opening_balance

        logger.info("Created account %d (%s)", account.id, account.name)
        account.exchange_rate = 1.0
        return account

    def rename_account(self, account_id: int, new_name: str) -> Account:
        """Rename an account; raises NotFoundError or ValidationError."""
        clean_name = self._validate_name(new_name)

        with self._uow.transaction() as uow:
            account = self._require_account(uow, account_id)
            self._ensure_unique(uow, clean_name, exclude_id=account_id)
            account.name = clean_name
            return uow.accounts.update(account)

    def update_account(
        self,
        account_id: int,
        name: str,
        currency: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> Account:
        """Update name and currency (and optionally kind) of an account."""
        clean_name = self._validate_name(name)
        currency = self._validate_currency(currency)

        with self._uow.transaction() as uow:
            account = self._require_account(uow, account_id)
            self._ensure_unique(uow, clean_name, exclude_id=account_id)
            account.name = clean_name
            account.currency = currency
            if kind:
                account.kind = kind
            return uow.accounts.update(account)

    def delete_account(self, account_id: int) -> None:
        """
        Delete an account and every transaction it owns.

        Transfer counterparts on other accounts survive with their link cleared.

        Raises:
            NotFoundError: Account does not exist
        """
        with self._uow.transaction() as uow:
            self._require_account(uow, account_id)
            for counterpart_id in uow.transactions.list_external_counterpart_ids(account_id):
                uow.transactions.set_link(counterpart_id, None)
            removed = uow.transactions.delete_by_account(account_id)
            uow.accounts.delete(account_id)

        logger.info("Deleted account %d with %d transactions", account_id, removed)

    def get_account(self, account_id: int) -> Account:
        """Get an account by id (stored balance, exchange_rate 1.0)."""
        with self._uow.transaction() as uow:
            return self._require_account(uow, account_id)

    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by id with stored balances."""
        with self._uow.transaction() as uow:
            return uow.accounts.list_all()

    # Internal helpers

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Account name cannot be empty")
        return clean_name

    @staticmethod
    def _validate_currency(currency: Optional[str]) -> Optional[str]:
        try:
            return normalize_currency(currency)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    @staticmethod
    def _ensure_unique(
        uow: UnitOfWork,
        name: str,
        exclude_id: Optional[int] = None,
    ) -> None:
        existing = uow.accounts.find_by_name_casefold(name)
        if existing is not None and existing.id != exclude_id:
            raise ValidationError(f"Account name already exists: {existing.name}")

    @staticmethod
    def _require_account(uow: UnitOfWork, account_id: int) -> Account:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", account_id)
        return account
