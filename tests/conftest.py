"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch
the real database. Tables are created before each test and
dropped after it, so no test data persists.

Each unit of work holds the SQLite write lock until it
commits, so tests read and seed data through the store
rather than keeping a long-lived session open.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from double_entry_bank.api.dependencies import get_app_settings, get_store
from double_entry_bank.config import Settings
from double_entry_bank.main import app
from double_entry_bank.models import Base
from double_entry_bank.models.base import create_db_engine, create_session_factory
from double_entry_bank.services.account_service import AccountService
from double_entry_bank.services.ledger_service import LedgerService
from double_entry_bank.store.unit_of_work import Store


# Use SQLite for tests; no external database needed.
# A file (not :memory:) so that several threads can open
# their own connections in the concurrency tests.
TEST_SETTINGS = Settings(
    DATABASE_URL="sqlite:///./test.db",
    ISOLATION_LEVEL="SERIALIZABLE",
    LOCK_TIMEOUT_MS=30000,
    DEFAULT_CURRENCY="NGN",
    SETTLEMENT_ACCOUNT_NAME="Settlement Account",
    DEFAULT_PAGE_SIZE=20,
    MAX_PAGE_SIZE=100,
)

engine = create_db_engine(TEST_SETTINGS)
TestSessionLocal = create_session_factory(engine)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    This ensures each test starts with a clean database.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def settings():
    return TEST_SETTINGS


@pytest.fixture
def store():
    return Store(TestSessionLocal, isolation_level=TEST_SETTINGS.ISOLATION_LEVEL)


@pytest.fixture
def ledger(store, settings):
    return LedgerService(store, settings)


@pytest.fixture
def account_service(store, settings):
    return AccountService(store, settings)


@pytest.fixture
def settlement(account_service):
    """The seeded NGN settlement account."""
    return account_service.ensure_settlement_account()


@pytest.fixture
def user(account_service):
    return account_service.create_user("owner@test.com")


@pytest.fixture
def open_account(account_service, ledger, user, settlement):
    """Factory: open an account for the test user, optionally funded by a deposit."""
    def _open(name="Main", currency="NGN", deposit=None):
        account = account_service.open_account(user.id, name, currency)
        if deposit is not None:
            ledger.deposit(account.id, deposit)
        return account
    return _open


@pytest.fixture
def balance_of(store):
    """Read an account's stored balance in a fresh unit of work."""
    def _balance(account_id) -> Decimal:
        with store.transaction() as q:
            return q.accounts.get_account(account_id).balance
    return _balance


@pytest.fixture
def client(store, settings):
    """
    Provide a test client wired to the test store.

    We override the store and settings dependencies so the
    FastAPI app uses the test database instead of building
    its own engine in the lifespan handler.
    """
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_app_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
