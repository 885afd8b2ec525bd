"""Account summary: balances converted into each account's currency."""

import logging
from typing import Iterable, Mapping, Optional

from ledger.core.exceptions import ValidationError
from ledger.core.normalize import normalize_currency
from ledger.domain.models import Account, CurrencySum, USD
from ledger.repositories.protocols import UnitOfWork
from ledger.services.balance_aggregator import compute_balances
from ledger.services.currency_resolver import rate_pair_id, usd_pair_id
from ledger.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)


def required_pair_ids(
    target_currency: str,
    accounts: Iterable[Account],
    sums: Iterable[CurrencySum],
    override_rates: Mapping[str, float],
) -> set[str]:
    """
    Pair ids worth fetching to convert `sums` for `accounts`.

    Every involved currency that is neither USD nor overridden gets its
    ``CURUSD=X`` pivot. Direct pairs are added for transaction -> account
    and account -> target conversions when both sides are USD or fetchable.
    """
    accounts = list(accounts)
    sums = list(sums)
    account_currency = {a.id: a.currency or target_currency for a in accounts}

    involved = {target_currency}
    involved.update(a.currency for a in accounts if a.currency)
    involved.update(s.currency for s in sums if s.currency)

    fetchable = {c for c in involved if c != USD and c not in override_rates}

    def usd_or_fetchable(currency: str) -> bool:
        return currency == USD or currency in fetchable

    pair_ids = {usd_pair_id(c) for c in fetchable}

    for row in sums:
        acc_currency = account_currency.get(row.account_id, target_currency)
        tx_currency = row.currency or acc_currency
        if tx_currency != acc_currency and usd_or_fetchable(tx_currency) and usd_or_fetchable(acc_currency):
            pair_ids.add(rate_pair_id(tx_currency, acc_currency))

    for account in accounts:
        if account.currency and account.currency != target_currency:
            if usd_or_fetchable(account.currency) and usd_or_fetchable(target_currency):
                pair_ids.add(rate_pair_id(account.currency, target_currency))

    return pair_ids


class AccountSummaryService:
    """
    Lists accounts with balances computed from their transactions.

    Store reads happen in one unit of work; rates are fetched afterwards,
    outside any store transaction.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        market_data: MarketDataService,
        default_target_currency: str = USD,
    ):
        self._uow = uow
        self._market_data = market_data
        self._default_target = normalize_currency(default_target_currency) or USD

    def list_accounts(self, target_currency: Optional[str] = None) -> list[Account]:
        """
        List all accounts ordered by id with converted balances.

        Args:
            target_currency: Currency for accounts without one and for
                exchange_rate; defaults to the configured target

        Returns:
            Accounts with `balance` in each account's own currency and
            `exchange_rate` relative to the target
        """
        try:
            target = normalize_currency(target_currency) or self._default_target
        except ValueError as e:
            raise ValidationError(str(e)) from e

        with self._uow.transaction() as uow:
            accounts = uow.accounts.list_all()
            sums = uow.transactions.sum_by_account_and_currency()
            overrides = uow.exchange_rates.list_all()

        pair_ids = required_pair_ids(target, accounts, sums, overrides)
        live_rates = self._market_data.get_rates(sorted(pair_ids)) if pair_ids else {}
        missing = pair_ids - set(live_rates)
        if missing:
            logger.info("No live rate for %s; conversions fall back", ", ".join(sorted(missing)))

        return compute_balances(accounts, sums, target, live_rates, overrides)
