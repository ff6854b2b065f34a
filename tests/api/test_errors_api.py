"""
Every error leaves the app as ``{"error", "code"}``, including ones raised
outside the message board's own routes.
"""

import sqlite3

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import make_url

from message_board.api import messages as messages_api
from message_board.config import settings


def test_unknown_path_is_not_found(client: TestClient):
    response = client.get("/no-such-page")

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"
    assert "error" in response.json()


def test_wrong_method_is_method_not_allowed(client: TestClient):
    response = client.post("/messages")

    assert response.status_code == 405
    assert response.json()["code"] == "method_not_allowed"


@pytest.fixture
def missing_messages_table(monkeypatch):
    monkeypatch.setattr(settings, "db_max_retries", 1)
    conn = sqlite3.connect(make_url(settings.app_database_url).database)
    conn.execute("ALTER TABLE messages RENAME TO messages_unavailable")
    conn.commit()
    try:
        yield
    finally:
        conn.execute("ALTER TABLE messages_unavailable RENAME TO messages")
        conn.commit()
        conn.close()


def test_storage_failure_is_reported_as_storage_error(client: TestClient, missing_messages_table):
    response = client.get("/messages")

    assert response.status_code == 500
    assert response.json() == {"error": "DB error.", "code": "storage_error"}


def signup(client: TestClient, username: str) -> None:
    assert client.post("/signup", json={"username": username, "password": "pw"}).status_code == 200


@pytest.fixture
def message_vanishes_after_ownership_check(monkeypatch):
    check_ownership = messages_api.require_ownership

    async def check_then_delete(message_id, identity, message_db_handler):
        message = await check_ownership(message_id, identity, message_db_handler)
        await message_db_handler.delete_by_id(message_id)
        return message

    monkeypatch.setattr(messages_api, "require_ownership", check_then_delete)


@pytest.mark.parametrize("path", ["/update", "/delete"])
def test_message_deleted_after_ownership_check_is_not_found(
    client: TestClient, message_vanishes_after_ownership_check, path: str
):
    signup(client, "alice")
    message_id = client.post("/submit", json={"message": "hi"}).json()["id"]

    response = client.post(path, json={"id": message_id, "message": "edited"})

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"
    assert client.get("/messages").json() == []
