"""Transaction engine: create, update and delete ledger entries.

Every operation runs inside one unit of work and keeps two invariants:
each account's stored balance equals the sum of its rows, and transfer
pairs stay linked to each other with opposite amounts.
"""

import logging
import sys
from dataclasses import dataclass, replace
from typing import Optional

from ledger.core.clock import parse_iso_date
from ledger.core.exceptions import ValidationError, NotFoundError
from ledger.core.normalize import normalize_currency, normalize_symbol
from ledger.domain.models import (
    Account,
    Transaction,
    SystemCategory,
    BUY_PAYEE,
    SELL_PAYEE,
)
from ledger.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)

EPSILON = sys.float_info.epsilon


@dataclass
class TransactionCreate:
    """Input data for creating a transaction."""

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


@dataclass
class InvestmentTransactionCreate:
    """Input data for recording a buy or sell of an instrument."""

    account_id: int
    date: str
    ticker: str
    shares: float
    price_per_share: float
    fee: float = 0.0
    is_buy: bool = True
    currency: Optional[str] = None


@dataclass
class TransactionUpdate:
    """Replacement data for an existing transaction (may move it to another account)."""

    account_id: int
    date: str
    payee: str
    amount: float
    notes: Optional[str] = None
    category: Optional[str] = None
    currency: Optional[str] = None


@dataclass
class InvestmentTransactionUpdate:
    """Replacement trade data; notes default to the generated description."""

    account_id: int
    date: str
    ticker: str
    shares: float
    price_per_share: float
    fee: float = 0.0
    is_buy: bool = True
    notes: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class _Trade:
    ticker: str
    amount: float
    shares: float
    price_per_share: float
    fee: float
    payee: str
    notes: str


def post_entry(uow: UnitOfWork, txn: Transaction) -> Transaction:
    """
    Insert a row and add its amount to the owning account's balance.

    Must be called inside `uow.transaction()`. Every path that creates a
    row goes through here.
    """
    created = uow.transactions.create(txn)
    uow.accounts.add_to_balance(created.account_id, created.amount)
    return created


def _format_shares(shares: float) -> str:
    return str(int(shares)) if float(shares).is_integer() else str(shares)


def _build_trade(
    ticker: str,
    shares: float,
    price_per_share: float,
    fee: Optional[float],
    is_buy: bool,
) -> _Trade:
    symbol = normalize_symbol(ticker)
    if symbol is None:
        raise ValidationError("Ticker is required for investment transactions")
    if shares is None or shares <= 0:
        raise ValidationError("Shares must be greater than zero")
    if price_per_share is None or price_per_share < 0:
        raise ValidationError("Price per share cannot be negative")
    fee = fee or 0.0
    if fee < 0:
        raise ValidationError("Fee cannot be negative")

    total = shares * price_per_share
    if is_buy:
        amount = -(total + fee)
        stored_shares = shares
        payee = BUY_PAYEE
        notes = f"Bought {_format_shares(shares)} shares of {symbol}"
    else:
        amount = total - fee
        stored_shares = -shares
        payee = SELL_PAYEE
        notes = f"Sold {_format_shares(shares)} shares of {symbol}"

    return _Trade(
        ticker=symbol,
        amount=amount,
        shares=stored_shares,
        price_per_share=price_per_share,
        fee=fee,
        payee=payee,
        notes=notes,
    )


def _validate_date(value: str) -> str:
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}; expected ISO 8601 (YYYY-MM-DD)") from e


def _validate_currency(value: Optional[str]) -> Optional[str]:
    try:
        return normalize_currency(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def _validate_payee(value: str) -> str:
    if value is None or not value.strip():
        raise ValidationError("Payee cannot be empty")
    return value


class TransactionService:
    """
    Service for mutating the ledger.

    A transaction whose payee is exactly the name of another account is a
    transfer: a mirrored row is written on that account and both rows are
    linked. Updates and deletes keep the mirrored row in step.
    """

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    def create_transaction(self, data: TransactionCreate) -> Transaction:
        """
        Create a transaction, detecting transfers by payee.

        Args:
            data: Transaction fields

        Returns:
            The caller's row, linked to its counterpart when it is a transfer

        Raises:
            ValidationError: Bad date, payee or currency
            NotFoundError: Account does not exist
        """
        date = _validate_date(data.date)
        payee = _validate_payee(data.payee)
        currency = _validate_currency(data.currency)

        with self._uow.transaction() as uow:
            account = self._require_account(uow, data.account_id)
            target = uow.accounts.find_other_by_name(payee, account.id)
            is_transfer = target is not None

            txn = post_entry(
                uow,
                Transaction(
                    id=None,
                    account_id=account.id,
                    date=date,
                    payee=payee,
                    amount=data.amount,
                    notes=data.notes,
                    category=SystemCategory.TRANSFER.value if is_transfer else data.category,
                    ticker=normalize_symbol(data.ticker),
                    shares=data.shares,
                    price_per_share=data.price_per_share,
                    fee=data.fee,
                    currency=currency,
                    is_transfer=is_transfer,
                ),
            )

            if target is not None:
                counterpart = post_entry(
                    uow,
                    Transaction(
                        id=None,
                        account_id=target.id,
                        date=date,
                        payee=account.name,
                        amount=-data.amount,
                        notes=data.notes,
                        category=SystemCategory.TRANSFER.value,
                        currency=currency,
                        linked_tx_id=txn.id,
                        is_transfer=True,
                    ),
                )
                uow.transactions.set_link(txn.id, counterpart.id)
                txn.linked_tx_id = counterpart.id
                logger.info(
                    "Created transfer %d <-> %d between accounts %d and %d",
                    txn.id,
                    counterpart.id,
                    account.id,
                    target.id,
                )

        return txn

    def create_investment_transaction(self, data: InvestmentTransactionCreate) -> Transaction:
        """Record a buy or sell; only the owning account's balance changes."""
        date = _validate_date(data.date)
        currency = _validate_currency(data.currency)
        trade = _build_trade(
            data.ticker, data.shares, data.price_per_share, data.fee, data.is_buy
        )

        with self._uow.transaction() as uow:
            account = self._require_account(uow, data.account_id)
            return post_entry(
                uow,
                Transaction(
                    id=None,
                    account_id=account.id,
                    date=date,
                    payee=trade.payee,
                    amount=trade.amount,
                    notes=trade.notes,
                    category=SystemCategory.INVESTMENT.value,
                    ticker=trade.ticker,
                    shares=trade.shares,
                    price_per_share=trade.price_per_share,
                    fee=trade.fee,
                    currency=currency,
                ),
            )

    def update_transaction(self, txn_id: int, data: TransactionUpdate) -> Transaction:
        """
        Overwrite a transaction and re-balance the affected accounts.

        The row may move to another account. A transfer's counterpart is
        rewritten to mirror the new amount, date, notes and currency.

        Raises:
            NotFoundError: Transaction or destination account does not exist
            ValidationError: Bad date, payee or currency
        """
        date = _validate_date(data.date)
        payee = _validate_payee(data.payee)
        currency = _validate_currency(data.currency)

        with self._uow.transaction() as uow:
            existing = self._require_transaction(uow, txn_id)
            new_account = self._require_account(uow, data.account_id)

            updated = uow.transactions.update(
                replace(
                    existing,
                    account_id=new_account.id,
                    date=date,
                    payee=payee,
                    notes=data.notes,
                    category=data.category,
                    amount=data.amount,
                    currency=currency,
                )
            )
            self._rebalance(uow, existing, updated)

            counterpart = self._find_counterpart(uow, updated, repair=True)
            if counterpart is not None:
                self._mirror_counterpart(uow, updated, counterpart, new_account)
                updated.linked_tx_id = counterpart.id
            else:
                updated.linked_tx_id = None

        return updated

    def update_investment_transaction(
        self,
        txn_id: int,
        data: InvestmentTransactionUpdate,
    ) -> Transaction:
        """Overwrite a trade, recomputing amount and shares; no counterpart handling."""
        date = _validate_date(data.date)
        currency = _validate_currency(data.currency)
        trade = _build_trade(
            data.ticker, data.shares, data.price_per_share, data.fee, data.is_buy
        )
        notes = data.notes if data.notes and data.notes.strip() else trade.notes

        with self._uow.transaction() as uow:
            existing = self._require_transaction(uow, txn_id)
            new_account = self._require_account(uow, data.account_id)

            updated = uow.transactions.update(
                replace(
                    existing,
                    account_id=new_account.id,
                    date=date,
                    payee=trade.payee,
                    notes=notes,
                    category=SystemCategory.INVESTMENT.value,
                    amount=trade.amount,
                    ticker=trade.ticker,
                    shares=trade.shares,
                    price_per_share=trade.price_per_share,
                    fee=trade.fee,
                    currency=currency,
                )
            )
            self._rebalance(uow, existing, updated)

        return updated

    def delete_transaction(self, txn_id: int) -> None:
        """
        Delete a transaction and, for a transfer, its counterpart.

        Raises:
            NotFoundError: Transaction does not exist
        """
        with self._uow.transaction() as uow:
            txn = self._require_transaction(uow, txn_id)
            counterpart = self._find_counterpart(uow, txn, repair=False)

            uow.transactions.delete(txn.id)
            uow.accounts.add_to_balance(txn.account_id, -txn.amount)

            if counterpart is not None:
                uow.transactions.delete(counterpart.id)
                uow.accounts.add_to_balance(counterpart.account_id, -counterpart.amount)
                logger.info("Deleted transfer pair %d <-> %d", txn.id, counterpart.id)

    # Internal helpers

    @staticmethod
    def _require_account(uow: UnitOfWork, account_id: int) -> Account:
        account = uow.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    @staticmethod
    def _require_transaction(uow: UnitOfWork, txn_id: int) -> Transaction:
        txn = uow.transactions.get_by_id(txn_id)
        if txn is None:
            raise NotFoundError("Transaction", txn_id)
        return txn

    @staticmethod
    def _rebalance(uow: UnitOfWork, old: Transaction, new: Transaction) -> None:
        if old.account_id == new.account_id:
            diff = new.amount - old.amount
            if abs(diff) > EPSILON:
                uow.accounts.add_to_balance(new.account_id, diff)
        else:
            uow.accounts.add_to_balance(old.account_id, -old.amount)
            uow.accounts.add_to_balance(new.account_id, new.amount)

    @staticmethod
    def _mirror_counterpart(
        uow: UnitOfWork,
        txn: Transaction,
        counterpart: Transaction,
        owner: Account,
    ) -> None:
        new_amount = -txn.amount
        diff = new_amount - counterpart.amount
        uow.transactions.update(
            replace(
                counterpart,
                date=txn.date,
                payee=owner.name,
                notes=txn.notes,
                category=SystemCategory.TRANSFER.value,
                amount=new_amount,
                currency=txn.currency,
                linked_tx_id=txn.id,
                is_transfer=True,
            )
        )
        if abs(diff) > EPSILON:
            uow.accounts.add_to_balance(counterpart.account_id, diff)

    @staticmethod
    def _find_counterpart(
        uow: UnitOfWork,
        txn: Transaction,
        repair: bool,
    ) -> Optional[Transaction]:
        """
        Locate the other half of a transfer.

        Follows the structural link; a link to a missing row is cleared.
        Without a link, falls back to matching notes among unlinked transfer
        rows and, when `repair` is set, writes the link on both rows.
        """
        if txn.linked_tx_id is not None:
            counterpart = uow.transactions.get_by_id(txn.linked_tx_id)
            if counterpart is None:
                logger.warning(
                    "Transaction %d links to missing row %d; clearing link",
                    txn.id,
                    txn.linked_tx_id,
                )
                uow.transactions.set_link(txn.id, None)
            return counterpart

        if not txn.is_transfer or not (txn.notes and txn.notes.strip()):
            return None

        candidates = [
            c
            for c in uow.transactions.find_unlinked_transfers_by_notes(txn.notes, txn.id)
            if c.account_id != txn.account_id
        ]
        if not candidates:
            return None
        if len(candidates) > 1:
            logger.warning(
                "Transfer %d matches %d unlinked rows by notes; not pairing",
                txn.id,
                len(candidates),
            )
            return None

        counterpart = candidates[0]
        if repair:
            uow.transactions.set_link(txn.id, counterpart.id)
            uow.transactions.set_link(counterpart.id, txn.id)
            counterpart.linked_tx_id = txn.id
            logger.info("Repaired transfer link %d <-> %d by notes", txn.id, counterpart.id)
        return counterpart
