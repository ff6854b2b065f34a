# Authentication API routes for signup, login, logout and the current identity

from fastapi import APIRouter, Depends, Response

from message_board.config import settings
from message_board.dependencies.auth import (
    get_current_identity_optional,
    get_session_manager,
    get_session_token,
)
from message_board.dependencies.body import parsed_body
from message_board.schemas import (
    AuthResponse,
    Credentials,
    Identity,
    IssuedSession,
    MeResponse,
    SuccessResponse,
)
from message_board.services.session_manager import SessionManager
from message_board.utils.auth import sign_session_token
from message_board.utils.logger import setup_logger

logger = setup_logger("api.auth")

router = APIRouter(tags=["Authentication"])


def set_session_cookie(response: Response, issued: IssuedSession) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_token(issued.token),
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


@router.post("/signup", response_model=AuthResponse)
async def signup(
    response: Response,
    credentials: Credentials = Depends(parsed_body(Credentials)),
    current_token: str | None = Depends(get_session_token),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """Create an account and log it in."""
    issued = await session_manager.signup_and_login(
        credentials.username, credentials.password
    )
    # Replace whatever session the browser was carrying
    await session_manager.destroy(current_token)
    set_session_cookie(response, issued)
    return AuthResponse(
        message="User created and logged in.", username=issued.username
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    response: Response,
    credentials: Credentials = Depends(parsed_body(Credentials)),
    current_token: str | None = Depends(get_session_token),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """Authenticate with username and password and start a session."""
    issued = await session_manager.login(credentials.username, credentials.password)
    await session_manager.destroy(current_token)
    set_session_cookie(response, issued)
    return AuthResponse(message="Logged in.", username=issued.username)


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    current_token: str | None = Depends(get_session_token),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """End the current session. Succeeds even without one."""
    await session_manager.destroy(current_token)
    clear_session_cookie(response)
    return SuccessResponse(message="Logged out.")


@router.get("/me", response_model=MeResponse | None)
async def me(identity: Identity | None = Depends(get_current_identity_optional)):
    """The logged-in user, or null."""
    if identity is None:
        return None
    return MeResponse(id=identity.user_id, username=identity.username)
