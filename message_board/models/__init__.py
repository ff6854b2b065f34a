"""
Database models for the message board.

Architecture: User → Message (optional owner), User → Session.
"""

from message_board.models.message import Message
from message_board.models.session import Session
from message_board.models.user import User

__all__ = [
    "User",
    "Message",
    "Session",
]
