"""
Shared test fixtures.

Sets up an isolated SQLite test database so tests never touch
the real ledger file. Tables are created before each test and
dropped after it, so every test starts from an empty shop.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shop_ledger.main import app
from shop_ledger.models.base import Base, get_db
from shop_ledger.services.events import financial_events


TEST_DATABASE_URL = "sqlite:///./test_shop_ledger.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_financial_events():
    """Handlers registered by one test must not see the next test's events."""
    yield
    financial_events.clear()


@pytest.fixture
def session_factory():
    """Session factory for collections, bound to the test database."""
    return TestSessionLocal


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
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the FastAPI app uses
    the test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
