"""Per-account balance computation across transaction currencies."""

from collections import defaultdict
from dataclasses import replace
from typing import Iterable, Optional

from ledger.domain.models import Account, CurrencySum
from ledger.services.currency_resolver import RateMap, resolve_rate


def compute_balances(
    accounts: Iterable[Account],
    sums: Iterable[CurrencySum],
    target_currency: str,
    live_rates: Optional[RateMap] = None,
    override_rates: Optional[RateMap] = None,
) -> list[Account]:
    """
    Convert each account's per-currency transaction sums into its own currency.

    Rows without a currency are in the account's currency; accounts without a
    currency are in `target_currency`. Accounts with no transactions keep their
    stored balance. `exchange_rate` is set to the rate from the account's
    currency to `target_currency`. Inputs are not mutated.
    """
    accounts = list(accounts)
    by_id = {account.id: account for account in accounts}
    totals: dict[int, float] = defaultdict(float)

    for row in sums:
        account = by_id.get(row.account_id)
        if account is None:
            continue
        account_currency = account.currency or target_currency
        row_currency = row.currency or account_currency
        rate = resolve_rate(row_currency, account_currency, live_rates, override_rates)
        totals[row.account_id] += row.amount * rate

    result = []
    for account in accounts:
        if account.currency:
            exchange_rate = resolve_rate(
                account.currency, target_currency, live_rates, override_rates
            )
        else:
            exchange_rate = 1.0
        balance = totals[account.id] if account.id in totals else account.balance
        result.append(replace(account, balance=balance, exchange_rate=exchange_rate))
    return result
