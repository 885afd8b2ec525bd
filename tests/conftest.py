"""
Pytest configuration and fixtures for ledger tests.

This module provides:
- In-memory SQLite database fixtures (schema built by the migrations)
- Unit of work, repository and service fixtures
- Deterministic, failing and slow exchange-rate providers
- Factory helpers for accounts and transactions
- FastAPI test client wired to the test database
"""

import threading
from typing import Callable, Optional

import pytest
from sqlalchemy import StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from ledger.main import app
from ledger.api.deps import get_db, get_market_data_service
from ledger.config.settings import Settings, set_settings, reset_settings
from ledger.domain.models import Account, Transaction
from ledger.repositories.sqlalchemy import (
    create_db_engine,
    run_migrations,
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyExchangeRateRepository,
    SqlAlchemyUnitOfWork,
)
from ledger.services import (
    AccountService,
    TransactionService,
    TransactionCreate,
    LedgerQueryService,
    ExchangeRateService,
    MarketDataService,
    AccountSummaryService,
)


FIXED_TODAY = "2024-06-15"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_db_engine("sqlite:///:memory:", poolclass=StaticPool)
    run_migrations(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow(test_session) -> SqlAlchemyUnitOfWork:
    """Provide a unit of work over the test session."""
    return SqlAlchemyUnitOfWork(test_session)


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def exchange_rate_repo(test_session) -> SqlAlchemyExchangeRateRepository:
    """Provide test ExchangeRateRepository."""
    return SqlAlchemyExchangeRateRepository(test_session)


# =============================================================================
# RATE PROVIDER FIXTURES
# =============================================================================


class DeterministicRateProvider:
    """
    Deterministic exchange-rate provider for testing.

    Serves fixed rates and records every pair requested.
    """

    FIXED_RATES = {
        "EURUSD=X": 1.2,
        "GBPUSD=X": 1.5,
        "JPYUSD=X": 0.0067,
    }

    def __init__(self, rates: Optional[dict[str, float]] = None):
        self.rates = dict(self.FIXED_RATES if rates is None else rates)
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def get_rate(self, pair_id: str) -> Optional[float]:
        with self._lock:
            self.calls.append(pair_id)
        return self.rates.get(pair_id)


class FailingRateProvider:
    """Provider that always raises (simulates network failure)."""

    def get_rate(self, pair_id: str) -> Optional[float]:
        raise ConnectionError("Rate API unavailable")


class BlockingRateProvider:
    """Provider whose calls block until released (simulates a hung request)."""

    def __init__(self):
        self.release = threading.Event()
        self.started: list[str] = []
        self._lock = threading.Lock()

    def get_rate(self, pair_id: str) -> Optional[float]:
        with self._lock:
            self.started.append(pair_id)
        self.release.wait(timeout=5)
        return 1.0


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def deterministic_provider() -> DeterministicRateProvider:
    """Provide deterministic rate provider."""
    return DeterministicRateProvider()


@pytest.fixture
def failing_provider() -> FailingRateProvider:
    """Provide failing rate provider."""
    return FailingRateProvider()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def account_service(uow) -> AccountService:
    """Provide AccountService with a fixed 'today'."""
    return AccountService(uow, today=lambda: FIXED_TODAY)


@pytest.fixture
def transaction_service(uow) -> TransactionService:
    """Provide TransactionService."""
    return TransactionService(uow)


@pytest.fixture
def query_service(uow) -> LedgerQueryService:
    """Provide LedgerQueryService."""
    return LedgerQueryService(uow)


@pytest.fixture
def exchange_rate_service(uow) -> ExchangeRateService:
    """Provide ExchangeRateService."""
    return ExchangeRateService(uow)


@pytest.fixture
def market_data_service(deterministic_provider, fake_clock) -> MarketDataService:
    """Provide MarketDataService with deterministic provider and fake clock."""
    service = MarketDataService(
        provider=deterministic_provider,
        cache_ttl_seconds=60,
        fetch_timeout_seconds=2.0,
        clock=fake_clock,
    )
    yield service
    service.close()


@pytest.fixture
def summary_service(uow, market_data_service) -> AccountSummaryService:
    """Provide AccountSummaryService."""
    return AccountSummaryService(uow, market_data_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service) -> Callable[..., Account]:
    """Factory for creating test accounts."""
    counter = {"n": 0}

    def _create_account(
        name: Optional[str] = None,
        opening_balance: float = 0.0,
        currency: Optional[str] = None,
    ) -> Account:
        counter["n"] += 1
        return account_service.create_account(
            name=name or f"Account {counter['n']}",
            opening_balance=opening_balance,
            currency=currency,
        )

    return _create_account


@pytest.fixture
def transaction_factory(transaction_service) -> Callable[..., Transaction]:
    """Factory for creating test transactions."""

    def _create_transaction(
        account_id: int,
        amount: float,
        payee: str = "Grocery Store",
        date: str = "2024-06-01",
        notes: Optional[str] = None,
        category: Optional[str] = "Food",
        currency: Optional[str] = None,
    ) -> Transaction:
        return transaction_service.create_transaction(
            TransactionCreate(
                account_id=account_id,
                date=date,
                payee=payee,
                amount=amount,
                notes=notes,
                category=category,
                currency=currency,
            )
        )

    return _create_transaction


@pytest.fixture
def sample_account(account_factory) -> Account:
    """Create a cash account with a 100.00 opening balance."""
    return account_factory(name="Checking", opening_balance=100.0)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(session_factory, market_data_service) -> TestClient:
    """Provide FastAPI test client with test database."""
    set_settings(Settings(database_url="sqlite://", target_currency="USD"))

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_service] = lambda: market_data_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def stored_balance(repo: SqlAlchemyAccountRepository, account_id: int) -> float:
    """Return the persisted balance of an account."""
    account = repo.get_by_id(account_id)
    assert account is not None, f"Account {account_id} missing"
    return account.balance


def assert_balance_invariant(
    account_repo: SqlAlchemyAccountRepository,
    transaction_repo: SqlAlchemyTransactionRepository,
) -> None:
    """Assert every account's stored balance equals the sum of its rows."""
    for account in account_repo.list_all():
        total = sum(t.amount for t in transaction_repo.list_by_account(account.id))
        assert account.balance == pytest.approx(total), (
            f"Account {account.id} balance {account.balance} != sum {total}"
        )
