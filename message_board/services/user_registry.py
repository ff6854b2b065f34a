"""
User registry: account creation and lookup.

Accounts are append-only. Usernames are compared exactly (case-sensitive); a
collision rejects the signup instead of altering the name.
"""

from __future__ import annotations

import asyncio

from sqlalchemy.exc import IntegrityError

from message_board.db_handlers import UserDBHandler
from message_board.errors import DuplicateUsername, InvalidInput
from message_board.models import User
from message_board.utils.auth import get_password_hash
from message_board.utils.logger import setup_logger

logger = setup_logger("user_registry")


class UserRegistry:
    """Creates accounts and looks them up by username or id."""

    def __init__(self):
        self.users = UserDBHandler()

    async def create(self, username: str | None, password: str | None) -> User:
        if not username or not username.strip() or not password:
            raise InvalidInput("Username and password required.")

        if await self.users.get_user_by_username(username):
            raise DuplicateUsername()

        password_hash = await asyncio.to_thread(get_password_hash, password)

        try:
            user = await self.users.create(
                {"username": username, "password_hash": password_hash}
            )
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same name
            raise DuplicateUsername() from e

        logger.info(f"Created user '{user.username}' (ID: {user.id})")
        return user

    async def find_by_username(self, username: str) -> User | None:
        return await self.users.get_user_by_username(username)

    async def find_by_id(self, user_id: int) -> User | None:
        return await self.users.get(user_id)
