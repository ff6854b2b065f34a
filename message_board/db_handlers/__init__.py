from message_board.db_handlers.base import BaseDBHandler, check_local_db
from message_board.db_handlers.message import MessageDBHandler
from message_board.db_handlers.session import SessionDBHandler
from message_board.db_handlers.user import UserDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "MessageDBHandler",
    "SessionDBHandler",
    "UserDBHandler",
]
