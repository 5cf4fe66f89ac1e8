"""
Shared pytest fixtures for the BudgetBook test suite.

Uses FastAPI TestClient with an isolated temporary database so tests
never touch the real database.
"""

import os

os.environ.setdefault("BUDGETBOOK_SKIP_CREATE_TABLES", "1")

import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from budgetbook.database import create_tables, get_db
from budgetbook.dependencies import get_hasher
from budgetbook.main import app
from budgetbook.utils.hashing import BcryptHasher

LOGIN_CREDS = {"username": "admin", "password": "password"}
ADMIN_REGISTRATION = {**LOGIN_CREDS, "email": "admin@example.com"}


def fast_hasher():
    # Minimum bcrypt cost keeps the suite quick
    return BcryptHasher(rounds=4)


@pytest.fixture(scope="session")
def test_engine():
    """Create a temporary SQLite database for the entire test session."""
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    engine = create_engine(
        f"sqlite:///{tmp.name}",
        connect_args={"check_same_thread": False},
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()
    os.unlink(tmp.name)


@pytest.fixture(scope="session")
def client(test_engine):
    """Unauthenticated TestClient bound to the isolated test database."""
    TestSessionLocal = sessionmaker(bind=test_engine)

    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_hasher] = fast_hasher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def admin_id(client):
    """Registers the admin user once per session and returns its id."""
    r = client.post("/api/users/register", json=ADMIN_REGISTRATION)
    assert r.status_code == 201, f"Admin registration failed: {r.status_code} {r.text}"
    return r.json()["id"]


@pytest.fixture(scope="session")
def auth_headers(client, admin_id):
    r = client.post("/api/auth/login", json=LOGIN_CREDS)
    assert r.status_code == 200, f"TestClient login failed: {r.status_code} {r.text}"
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture(scope="session")
def test_db(test_engine):
    """Direct SQLAlchemy session for tests that need DB access."""
    TestSessionLocal = sessionmaker(bind=test_engine)
    db = TestSessionLocal()
    yield db
    db.close()
