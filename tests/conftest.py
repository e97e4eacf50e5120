"""Shared test fixtures for the SnipVault test suite.

Tests run against a throwaway SQLite file by default (set TEST_DATABASE_URL
to use PostgreSQL instead). Every test starts from freshly created tables.
A file rather than ``:memory:`` is used so that several sessions, including
the ones opened by concurrency tests, see the same database.
"""

import os
import tempfile

# Point the app at the test database before any app imports.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="snipvault-tests-")
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL",
    f"sqlite:///{_TEST_DB_DIR}/snipvault_test.db",
)
os.environ["LOG_FORMAT"] = "text"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient

from snipvault import models  # noqa: F401
from snipvault.database import Base, get_db, engine, SessionLocal
from snipvault.main import app
from snipvault.repositories import SnippetRepository
from snipvault.schemas.snippet import SnippetCreate


@pytest.fixture(autouse=True)
def _clean_tables():
    """Recreate all tables before each test for isolation.

    Runs before the test (not after) so test failures leave data
    available for debugging.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_snippet_payload(
    title: str = "Quick sort",
    code: str = "a\nb\nc",
    language: str = "python",
    **overrides,
) -> dict:
    """Factory for snippet creation payloads."""
    payload = {
        "title": title,
        "description": "Sorts a list in place",
        "code": code,
        "language": language,
        "created_by": "user-1",
    }
    payload.update(overrides)
    return payload


def insert_bare_snippet(db, **overrides) -> str:
    """Insert a snippet with no versions and return its id."""
    snippet = SnippetRepository(db).create(SnippetCreate(**make_snippet_payload(**overrides)))
    snippet_id = snippet.id
    db.commit()
    return snippet_id
