"""
Shared fixtures and configuration for the test suite.

The application reads its settings at import time, so the environment is
pointed at a throwaway SQLite file and log directory before anything from
``message_board`` or ``main`` is imported.
"""

import os
import sqlite3
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

_TEST_DIR = Path(tempfile.mkdtemp(prefix="message_board_tests_"))
TEST_DB_PATH = _TEST_DIR / "test_messages.db"

os.environ["MESSAGE_BOARD_DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["LOG_DIR"] = str(_TEST_DIR / "logs")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from message_board import models  # noqa: E402,F401
from message_board.models.base import Base  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def database_schema() -> Generator[None, None, None]:
    """Create the schema once for the whole session."""
    engine = create_engine(f"sqlite:///{TEST_DB_PATH}")
    Base.metadata.create_all(engine)
    engine.dispose()
    yield


@pytest.fixture(autouse=True)
def clean_tables(database_schema) -> Generator[None, None, None]:
    """Empty every table before each test so tests do not see each other's rows."""
    conn = sqlite3.connect(TEST_DB_PATH)
    try:
        conn.executescript(
            """
            DELETE FROM sessions;
            DELETE FROM messages;
            DELETE FROM users;
            DELETE FROM sqlite_sequence;
            """
        )
        conn.commit()
    finally:
        conn.close()
    yield


def insert_legacy_message(name: str, body: str) -> int:
    """Insert a message row without an owner, as older databases hold them."""
    conn = sqlite3.connect(TEST_DB_PATH)
    try:
        cursor = conn.execute(
            "INSERT INTO messages (name, message, user_id) VALUES (?, ?, NULL)",
            (name, body),
        )
        conn.commit()
        return cursor.lastrowid
    finally:
        conn.close()


@pytest.fixture
def legacy_message() -> int:
    return insert_legacy_message("old-timer", "posted before accounts existed")


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Create a new application instance for the test session.
    """
    from main import create_app

    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client with its own cookie jar. Runs the app's startup and shutdown.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def other_client(app: FastAPI) -> Generator[TestClient, None, None]:
    """A second browser, for a second user acting concurrently."""
    with TestClient(app) as c:
        yield c
