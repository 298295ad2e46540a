# tests/conftest.py

import os

# Must be set before hood_service reads its settings.
os.environ.setdefault("ENV", "test")

from datetime import datetime, timezone

import pytest
from starlette.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import hood_service.models  # noqa: F401  (registers every table on Base.metadata)
from hood_service.main import app
from hood_service.core.clock import FixedClock, get_clock
from hood_service.db.base_class import Base
from hood_service.db.session import get_db
from hood_service.graphql.router import CustomContext
from hood_service.graphql.schema import schema


# --- Test Database Setup ---
# One in-memory SQLite database shared by every connection of the pool.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Monday 2024-06-10, 09:00 UTC: after the 06:00 cutoff used by most tests.
NOW = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db_session():
    """Fresh schema per test; the code under test commits freely."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def clock():
    return FixedClock(NOW)


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db_session, clock):
    """
    Provides a TestClient bound to the test database and the fixed clock.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def gql(db_session, clock):
    """
    Executes a GraphQL document directly against the schema.

    ``user_id`` plays the role of the decoded token subject; leave it out
    for an anonymous request.
    """

    def execute(query: str, variables: dict | None = None, user_id: str | None = None):
        context = CustomContext(
            db=db_session,
            user={"sub": user_id} if user_id else None,
            clock=clock,
        )
        return schema.execute_sync(
            query, variable_values=variables, context_value=context
        )

    return execute
