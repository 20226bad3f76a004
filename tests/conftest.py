"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Each test gets freshly created tables
seeded with the fixed account set.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from account_ledger.main import app
from account_ledger.models import Account, Base
from account_ledger.models.base import get_db


# Use SQLite for tests, no external database needed.
# A file database (not :memory:) lets worker threads in the
# concurrency tests share it through separate connections;
# the generous timeout makes a writer wait for the row lock
# instead of failing with "database is locked".
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False, "timeout": 30},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

# id -> credit limit
SEED_ACCOUNTS = {
    1: 100000,
    2: 80000,
    3: 1000000,
    4: 10000000,
    5: 500000,
}


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables and seed accounts before each test,
    drop them after.
    """
    Base.metadata.create_all(bind=engine)
    session = TestSessionLocal()
    try:
        session.add_all([
            Account(id=account_id, balance=0, credit_limit=limit)
            for account_id, limit in SEED_ACCOUNTS.items()
        ])
        session.commit()
    finally:
        session.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def session_factory():
    """Hand out sessions for tests that need one per thread."""
    return TestSessionLocal


@pytest.fixture
def make_account(db_session):
    """Create an extra account with a chosen limit and balance."""
    def _make(account_id, credit_limit, balance=0):
        account = Account(
            id=account_id, balance=balance, credit_limit=credit_limit
        )
        db_session.add(account)
        db_session.commit()
        return account_id
    return _make


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    We override the get_db dependency so the FastAPI app
    uses our test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
