"""Shared test fixtures for mygram."""

import os
import sqlite3
import tempfile

# Keep the import-time database out of the working tree
os.environ.setdefault(
    "DATABASE_PATH", os.path.join(tempfile.gettempdir(), "mygram-test-import.db")
)

import pytest

from mygram.auth import service, token as auth_token
from mygram.auth.schemas import UserSignUp
from mygram.config import settings
from mygram.db import Core, get_core, init_db
from mygram.main import app
from mygram.schema import SCHEMA_PATH

# Fast hashing for tests
settings.bcrypt_work_factor = 4


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row
    db.execute("PRAGMA foreign_keys = ON")
    db.executescript(SCHEMA_PATH.read_text())
    db.commit()

    yield db

    db.close()


@pytest.fixture
def core(test_db):
    """Core bound to the in-memory test database."""
    return Core(test_db)


@pytest.fixture
def client():
    """Create test client on a fresh temp-file database.

    A file (not :memory:) is used because every request opens its own
    connection.
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    os.unlink(db_path)

    original_db_path = settings.database_path
    settings.database_path = db_path
    try:
        init_db()

        app.config["TESTING"] = True
        with app.test_client() as client:
            yield client
    finally:
        settings.database_path = original_db_path
        if os.path.exists(db_path):
            os.unlink(db_path)


@pytest.fixture
def create_user(client):
    """Factory registering a user in the client's database.

    Returns (claims, auth_headers) for the new user.
    """
    def _create(username="testuser", email="test@example.com", password="secret123"):
        data = UserSignUp(username=username, email=email, password=password)
        with get_core(atomic=True) as core:
            token_str = service.sign_up(core, data)
        claims = auth_token.validate_access_token(token_str)
        return claims, {"Authorization": f"Bearer {token_str}"}

    return _create


@pytest.fixture
def test_user(create_user):
    """Default test user as (claims, auth_headers)."""
    return create_user()


@pytest.fixture
def auth_headers(test_user):
    """Authorization header for the default test user."""
    _claims, headers = test_user
    return headers


@pytest.fixture
def other_auth_headers(create_user):
    """Authorization header for a second, unrelated user."""
    _claims, headers = create_user(username="otheruser", email="other@example.com")
    return headers
