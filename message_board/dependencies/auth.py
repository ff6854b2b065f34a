"""
Authentication dependencies for FastAPI route protection.
"""

from fastapi import Depends, Request

from message_board.config import settings
from message_board.errors import Unauthorized
from message_board.schemas import Identity
from message_board.services.session_manager import SessionManager
from message_board.utils.auth import unsign_session_token


def get_session_manager() -> SessionManager:
    return SessionManager()


def get_session_token(request: Request) -> str | None:
    """Raw session token from the signed session cookie, if present and intact."""
    return unsign_session_token(request.cookies.get(settings.session_cookie_name))


async def get_current_identity_optional(
    token: str | None = Depends(get_session_token),
    session_manager: SessionManager = Depends(get_session_manager),
) -> Identity | None:
    """
    Identity of the caller, or None for anonymous visitors and expired sessions.
    """
    return await session_manager.resolve(token)


async def require_login(
    identity: Identity | None = Depends(get_current_identity_optional),
) -> Identity:
    """Reject anonymous callers with 401; pass the identity through unchanged."""
    if identity is None:
        raise Unauthorized()
    return identity
