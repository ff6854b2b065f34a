"""
Session manager: login, signup-with-login, identity resolution and logout.

A session lasts a fixed time from issue (7 days by default). Resolving a
session never extends it; only a fresh login issues a new expiry. The raw
token is handed to the caller once, and only its digest is persisted.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

from message_board.config import settings
from message_board.db_handlers import SessionDBHandler
from message_board.errors import InvalidCredentials, InvalidInput
from message_board.models import User
from message_board.models.base import utcnow
from message_board.schemas import Identity, IssuedSession
from message_board.services.user_registry import UserRegistry
from message_board.utils.auth import (
    burn_password_check,
    generate_session_token,
    session_token_digest,
    verify_password,
)
from message_board.utils.logger import setup_logger

logger = setup_logger("session_manager")


class SessionManager:
    """Issues, validates and destroys login sessions."""

    def __init__(self, ttl: timedelta | None = None):
        self.ttl = ttl if ttl is not None else timedelta(days=settings.session_ttl_days)
        self.registry = UserRegistry()
        self.sessions = SessionDBHandler()

    async def login(self, username: str | None, password: str | None) -> IssuedSession:
        """
        Authenticate and issue a new session.

        Unknown users and wrong passwords raise the same InvalidCredentials,
        and both cost one bcrypt verification.
        """
        if not username or not password:
            raise InvalidInput("Username and password required.")

        user = await self.registry.find_by_username(username)
        if user is None:
            await asyncio.to_thread(burn_password_check, password)
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentials()

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info(f"Login failed for user ID {user.id}: invalid credentials")
            raise InvalidCredentials()

        issued = await self._issue(user)
        logger.info(f"User '{user.username}' (ID: {user.id}) logged in")
        return issued

    async def signup_and_login(
        self, username: str | None, password: str | None
    ) -> IssuedSession:
        """Create an account and log it in; no session exists if creation fails."""
        user = await self.registry.create(username, password)
        return await self._issue(user)

    async def resolve(self, token: str | None) -> Identity | None:
        """Identity behind a token, or None if the session is unknown or expired."""
        if not token:
            return None
        session = await self.sessions.get_active_by_digest(
            session_token_digest(token), utcnow()
        )
        if session is None:
            return None
        return Identity(user_id=session.user_id, username=session.username)

    async def destroy(self, token: str | None) -> None:
        """Invalidate a session. Unknown or already-destroyed tokens are ignored."""
        if not token:
            return
        removed = await self.sessions.delete_by_digest(session_token_digest(token))
        if removed:
            logger.info("Session destroyed")

    async def purge_expired(self) -> int:
        """Remove expired session rows."""
        removed = await self.sessions.delete_expired(utcnow())
        if removed:
            logger.info(f"Purged {removed} expired session(s)")
        return removed

    async def _issue(self, user: User) -> IssuedSession:
        # Keeps the table bounded in long-running processes
        await self.purge_expired()

        token = generate_session_token()
        created_at = utcnow()
        expires_at = created_at + self.ttl
        await self.sessions.create(
            {
                "token_digest": session_token_digest(token),
                "user_id": user.id,
                "username": user.username,
                "created_at": created_at,
                "expires_at": expires_at,
            }
        )
        return IssuedSession(
            token=token,
            user_id=user.id,
            username=user.username,
            expires_at=expires_at,
        )
