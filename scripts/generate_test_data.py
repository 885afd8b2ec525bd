#!/usr/bin/env python3
"""
Generate realistic ledger data for the last 3 months.
Simulates a household: salary, groceries, rent, transfers to savings,
a foreign-currency travel account and a few brokerage trades.
"""

import argparse
import random
import sys
from datetime import date, timedelta
from pathlib import Path

from ledger.app_context import LedgerContext
from ledger.config.settings import Settings
from ledger.core.exceptions import ValidationError
from ledger.services import TransactionCreate, InvestmentTransactionCreate


PAYEES = [
    ("Grocery Store", "Food", (-120.0, -30.0)),
    ("Coffee Shop", "Food", (-8.0, -3.0)),
    ("Gas Station", "Transport", (-70.0, -35.0)),
    ("Pharmacy", "Health", (-40.0, -10.0)),
    ("Bookstore", "Leisure", (-45.0, -12.0)),
]

STOCKS = [
    ("AAPL", 180.0),
    ("MSFT", 420.0),
    ("VTI", 250.0),
    ("SPY", 480.0),
]


def _get_or_create(ctx: LedgerContext, name: str, **kwargs):
    try:
        return ctx.accounts.create_account(name, **kwargs)
    except ValidationError:
        return next(a for a in ctx.accounts.list_accounts() if a.name.lower() == name.lower())


def generate_realistic_data(ctx: LedgerContext, seed: int = 7) -> None:
    """Populate the ledger behind `ctx` with ~3 months of activity."""
    rng = random.Random(seed)

    checking = _get_or_create(ctx, "Checking", opening_balance=2500.0)
    savings = _get_or_create(ctx, "Savings", opening_balance=10000.0)
    travel = _get_or_create(ctx, "Travel EUR", currency="EUR")
    brokerage = _get_or_create(ctx, "Brokerage", kind="investment")
    print(f"✓ Accounts ready: {checking.name}, {savings.name}, {travel.name}, {brokerage.name}")

    today = date.today()
    start_date = today - timedelta(days=90)
    count = 0

    day = start_date
    while day <= today:
        iso = day.isoformat()
        if day.day == 1:
            ctx.transactions.create_transaction(TransactionCreate(
                account_id=checking.id, date=iso, payee="Employer", amount=4200.0, category="Salary",
            ))
            ctx.transactions.create_transaction(TransactionCreate(
                account_id=checking.id, date=iso, payee="Landlord", amount=-1500.0, category="Rent",
            ))
            # Payee equal to an account name records a transfer
            ctx.transactions.create_transaction(TransactionCreate(
                account_id=checking.id, date=iso, payee=savings.name, amount=-500.0,
                notes=f"Monthly savings {day:%Y-%m}",
            ))
            ctx.transactions.create_transaction(TransactionCreate(
                account_id=checking.id, date=iso, payee=brokerage.name, amount=-1000.0,
                notes=f"Invest {day:%Y-%m}",
            ))
            count += 4
        if day.weekday() < 5 and rng.random() < 0.4:
            payee, category, (low, high) = rng.choice(PAYEES)
            ctx.transactions.create_transaction(TransactionCreate(
                account_id=checking.id, date=iso, payee=payee,
                amount=round(rng.uniform(low, high), 2), category=category,
            ))
            count += 1
        if day.weekday() == 0 and rng.random() < 0.5:
            symbol, base_price = rng.choice(STOCKS)
            ctx.transactions.create_investment_transaction(InvestmentTransactionCreate(
                account_id=brokerage.id, date=iso, ticker=symbol,
                shares=rng.randint(1, 3), price_per_share=round(base_price * rng.uniform(0.95, 1.05), 2),
                fee=1.0,
            ))
            count += 1
        day += timedelta(days=1)

    trip = today - timedelta(days=20)
    for offset, (payee, amount) in enumerate([("Hotel Lisboa", -320.0), ("Museu", -18.0), ("Tasca", -42.5)]):
        ctx.transactions.create_transaction(TransactionCreate(
            account_id=travel.id, date=(trip + timedelta(days=offset)).isoformat(),
            payee=payee, amount=amount, category="Travel", currency="EUR",
        ))
        count += 1

    print(f"✓ Created {count} transactions from {start_date} to {today}")
    print("\nBalances (target USD):")
    for account in ctx.summary.list_accounts():
        print(f"  {account.name:<12} {account.balance:>12,.2f} {account.currency or 'USD'}")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--data-dir", type=Path, default=None, help="Ledger data directory")
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    settings = Settings(data_dir=args.data_dir) if args.data_dir else Settings()
    with LedgerContext(settings, configure_logging=True) as ctx:
        generate_realistic_data(ctx, seed=args.seed)
    print("\n✓ Test data generation complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
