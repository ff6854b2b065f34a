from message_board.dependencies.auth import (
    get_current_identity_optional,
    get_session_manager,
    get_session_token,
    require_login,
)
from message_board.dependencies.body import parsed_body
from message_board.dependencies.messages import require_ownership

__all__ = [
    "get_current_identity_optional",
    "get_session_manager",
    "get_session_token",
    "parsed_body",
    "require_login",
    "require_ownership",
]
