"""
Integration tests for SQLAlchemy repositories with SQLite.

Tests cover:
- Account repository CRUD and name lookups
- Transaction repository CRUD, ordering and aggregate queries
- Exchange-rate repository upsert/delete
"""

import pytest

from ledger.core.exceptions import NotFoundError
from ledger.domain.models import Account, Transaction


def _txn(account_id: int, amount: float, **overrides) -> Transaction:
    fields = dict(
        id=None,
        account_id=account_id,
        date="2024-06-01",
        payee="Shop",
        amount=amount,
    )
    fields.update(overrides)
    return Transaction(**fields)


# =============================================================================
# ACCOUNT REPOSITORY TESTS
# =============================================================================


class TestAccountRepository:
    """Tests for SqlAlchemyAccountRepository."""

    def test_create_assigns_id(self, account_repo):
        account = account_repo.create(Account(id=None, name="Checking", currency="EUR"))

        assert account.id is not None
        assert account_repo.get_by_id(account.id).currency == "EUR"

    def test_find_by_name_casefold(self, account_repo):
        created = account_repo.create(Account(id=None, name="Savings"))

        assert account_repo.find_by_name_casefold("SAVINGS").id == created.id
        assert account_repo.find_by_name_casefold("Other") is None

    def test_find_other_by_name_is_exact_and_excludes(self, account_repo):
        a = account_repo.create(Account(id=None, name="A"))
        b = account_repo.create(Account(id=None, name="B"))

        assert account_repo.find_other_by_name("B", exclude_id=a.id).id == b.id
        assert account_repo.find_other_by_name("B", exclude_id=b.id) is None
        assert account_repo.find_other_by_name("b", exclude_id=a.id) is None

    def test_add_to_balance(self, account_repo):
        account = account_repo.create(Account(id=None, name="A"))

        account_repo.add_to_balance(account.id, 10.5)
        account_repo.add_to_balance(account.id, -0.5)

        assert account_repo.get_by_id(account.id).balance == pytest.approx(10.0)

    def test_add_to_balance_missing_account(self, account_repo):
        with pytest.raises(NotFoundError):
            account_repo.add_to_balance(999, 1.0)

    def test_update_and_delete(self, account_repo):
        account = account_repo.create(Account(id=None, name="A"))
        account.name = "Renamed"
        account.currency = "JPY"

        account_repo.update(account)
        assert account_repo.get_by_id(account.id).name == "Renamed"

        account_repo.delete(account.id)
        assert account_repo.get_by_id(account.id) is None

    def test_list_all_ordered_by_id(self, account_repo):
        z = account_repo.create(Account(id=None, name="Z"))
        a = account_repo.create(Account(id=None, name="A"))

        assert [acc.id for acc in account_repo.list_all()] == [z.id, a.id]


# =============================================================================
# TRANSACTION REPOSITORY TESTS
# =============================================================================


class TestTransactionRepository:
    """Tests for SqlAlchemyTransactionRepository."""

    @pytest.fixture
    def account(self, account_repo) -> Account:
        return account_repo.create(Account(id=None, name="Main"))

    def test_create_and_get_roundtrip_fields(self, transaction_repo, account):
        created = transaction_repo.create(
            _txn(
                account.id,
                -100.0,
                notes="n",
                category="Investment",
                ticker="VTI",
                shares=2.0,
                price_per_share=50.0,
                fee=0.0,
                currency="USD",
            )
        )

        fetched = transaction_repo.get_by_id(created.id)
        assert fetched.ticker == "VTI"
        assert fetched.shares == pytest.approx(2.0)
        assert fetched.currency == "USD"
        assert fetched.is_transfer is False
        assert fetched.is_investment is True

    def test_update_overwrites(self, transaction_repo, account):
        created = transaction_repo.create(_txn(account.id, -1.0))
        created.amount = -2.0
        created.payee = "Other"

        transaction_repo.update(created)

        fetched = transaction_repo.get_by_id(created.id)
        assert fetched.amount == pytest.approx(-2.0)
        assert fetched.payee == "Other"

    def test_update_missing_raises(self, transaction_repo, account):
        with pytest.raises(NotFoundError):
            transaction_repo.update(_txn(account.id, 1.0, id=777))

    def test_set_link(self, transaction_repo, account):
        a = transaction_repo.create(_txn(account.id, -1.0))
        b = transaction_repo.create(_txn(account.id, 1.0))

        transaction_repo.set_link(a.id, b.id)

        assert transaction_repo.get_by_id(a.id).linked_tx_id == b.id
        assert transaction_repo.get_by_id(a.id).is_linked is True

    def test_delete_by_account_returns_count(self, transaction_repo, account):
        transaction_repo.create(_txn(account.id, -1.0))
        transaction_repo.create(_txn(account.id, -2.0))

        assert transaction_repo.delete_by_account(account.id) == 2
        assert transaction_repo.list_by_account(account.id) == []

    def test_find_unlinked_transfers_by_notes(self, transaction_repo, account):
        match = transaction_repo.create(_txn(account.id, 1.0, notes="x", is_transfer=True))
        transaction_repo.create(_txn(account.id, 1.0, notes="x"))
        linked = transaction_repo.create(_txn(account.id, 1.0, notes="x", is_transfer=True))
        transaction_repo.set_link(linked.id, match.id)
        me = transaction_repo.create(_txn(account.id, -1.0, notes="x", is_transfer=True))

        result = transaction_repo.find_unlinked_transfers_by_notes("x", exclude_id=me.id)

        assert [t.id for t in result] == [match.id]

    def test_list_external_counterpart_ids(self, transaction_repo, account_repo, account):
        other = account_repo.create(Account(id=None, name="Other"))
        inside = transaction_repo.create(_txn(account.id, -5.0))
        outside = transaction_repo.create(_txn(other.id, 5.0, linked_tx_id=inside.id))
        transaction_repo.set_link(inside.id, outside.id)
        transaction_repo.create(_txn(other.id, 3.0))

        assert transaction_repo.list_external_counterpart_ids(account.id) == [outside.id]

    def test_sum_by_account_and_currency(self, transaction_repo, account):
        transaction_repo.create(_txn(account.id, 10.0))
        transaction_repo.create(_txn(account.id, 5.0))
        transaction_repo.create(_txn(account.id, 7.0, currency="EUR"))

        sums = {(s.account_id, s.currency): s.amount for s in transaction_repo.sum_by_account_and_currency()}

        assert sums == {
            (account.id, None): pytest.approx(15.0),
            (account.id, "EUR"): pytest.approx(7.0),
        }

    def test_foreign_key_enforced(self, transaction_repo, test_session):
        from sqlalchemy.exc import IntegrityError

        with pytest.raises(IntegrityError):
            transaction_repo.create(_txn(9999, 1.0))
        test_session.rollback()


# =============================================================================
# EXCHANGE RATE REPOSITORY TESTS
# =============================================================================


class TestExchangeRateRepository:
    """Tests for SqlAlchemyExchangeRateRepository."""

    def test_upsert_get_list_delete(self, exchange_rate_repo):
        exchange_rate_repo.upsert("CHF", 1.1)
        exchange_rate_repo.upsert("CHF", 1.2)
        exchange_rate_repo.upsert("SEK", 0.1)

        assert exchange_rate_repo.get("CHF") == pytest.approx(1.2)
        assert exchange_rate_repo.list_all() == {"CHF": pytest.approx(1.2), "SEK": pytest.approx(0.1)}
        assert exchange_rate_repo.delete("CHF") is True
        assert exchange_rate_repo.delete("CHF") is False
        assert exchange_rate_repo.get("CHF") is None
