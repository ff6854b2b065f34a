"""
The additive migration for databases created before messages had owners.
"""

import sqlite3
from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from message_board.db import _add_missing_columns


@pytest.fixture
def legacy_db(tmp_path: Path) -> Path:
    path = tmp_path / "legacy.db"
    conn = sqlite3.connect(path)
    try:
        conn.executescript(
            """
            CREATE TABLE messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT,
                message TEXT,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
            );
            INSERT INTO messages (name, message) VALUES ('old-timer', 'first post');
            """
        )
        conn.commit()
    finally:
        conn.close()
    return path


def test_adds_owner_column_and_keeps_rows(legacy_db: Path):
    engine = create_engine(f"sqlite:///{legacy_db}")
    try:
        with engine.begin() as conn:
            added = _add_missing_columns(conn)
        columns = {col["name"] for col in inspect(engine).get_columns("messages")}
    finally:
        engine.dispose()

    assert added == ["messages.user_id"]
    assert "user_id" in columns

    conn = sqlite3.connect(legacy_db)
    try:
        rows = conn.execute("SELECT name, message, user_id FROM messages").fetchall()
    finally:
        conn.close()
    assert rows == [("old-timer", "first post", None)]


def test_second_run_is_a_no_op(legacy_db: Path):
    engine = create_engine(f"sqlite:///{legacy_db}")
    try:
        with engine.begin() as conn:
            _add_missing_columns(conn)
        with engine.begin() as conn:
            assert _add_missing_columns(conn) == []
    finally:
        engine.dispose()
