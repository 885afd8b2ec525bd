"""
Integration tests for LedgerContext.

Tests cover:
- Opening a ledger stored on disk
- Services sharing one unit of work
- Converted summary through an injected rate provider
- Data surviving a reopen
"""

import pytest

from ledger.app_context import LedgerContext
from ledger.services import TransactionCreate

from tests.conftest import DeterministicRateProvider


class TestLedgerContext:
    """Tests for the in-process entry point."""

    def test_transfer_and_summary_on_disk(self, tmp_path):
        """
        GIVEN a fresh ledger under a data directory
        WHEN I create two accounts and a transfer between them
        THEN the summary shows both balances and the database file exists
        """
        provider = DeterministicRateProvider()

        with LedgerContext.for_data_dir(tmp_path, rate_provider=provider) as ctx:
            checking = ctx.accounts.create_account("Checking", opening_balance=100.0)
            travel = ctx.accounts.create_account("Travel", opening_balance=200.0, currency="EUR")
            ctx.transactions.create_transaction(
                TransactionCreate(
                    account_id=checking.id,
                    date="2024-06-02",
                    payee="Travel",
                    amount=-40.0,
                    currency="EUR",
                )
            )

            summary = {a.name: a for a in ctx.summary.list_accounts()}

        assert (tmp_path / "ledger.db").exists()
        assert summary["Checking"].balance == pytest.approx(100.0 - 40.0 * 1.2)
        assert summary["Checking"].exchange_rate == pytest.approx(1.0)
        assert summary["Travel"].balance == pytest.approx(240.0)
        assert summary["Travel"].exchange_rate == pytest.approx(1.2)
        assert "EURUSD=X" in provider.calls
        assert travel.currency == "EUR"

    def test_reopen_sees_committed_data(self, tmp_path):
        with LedgerContext.for_data_dir(tmp_path, rate_provider=DeterministicRateProvider()) as ctx:
            account = ctx.accounts.create_account("Checking", opening_balance=75.0)
            ctx.exchange_rates.set_custom_exchange_rate("chf", 1.1)

        with LedgerContext.for_data_dir(tmp_path, rate_provider=DeterministicRateProvider()) as ctx:
            [entry] = ctx.queries.list_transactions(account.id)
            assert ctx.accounts.get_account(account.id).balance == pytest.approx(75.0)
            assert ctx.exchange_rates.get_custom_exchange_rate("CHF") == pytest.approx(1.1)

        assert entry.payee == "Opening Balance"
