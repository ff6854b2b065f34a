"""
Message model for the shared feed.

Column names follow the long-standing ``messages`` table layout
(``name``, ``message``, ``user_id``, ``timestamp``); the attribute names say
what the columns hold.

A null ``owner_user_id`` marks a legacy/anonymous row that nobody may edit or
delete. ``author_display_name`` is a snapshot of the username at post time.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql.functions import now as db_now

from message_board.models.base import Base, IntegerIdMixin


class Message(Base, IntegerIdMixin):
    """A single post on the board."""

    __tablename__ = "messages"
    __table_args__ = {"sqlite_autoincrement": True}

    author_display_name = Column(
        "name",
        String(255),
        comment="Username of the author at post time",
    )

    body = Column(
        "message",
        Text,
        comment="Trimmed, non-empty message text",
    )

    owner_user_id = Column(
        "user_id",
        Integer,
        ForeignKey("users.id"),
        nullable=True,
        comment="Owning user; NULL for legacy rows, which are immutable",
    )

    created_at = Column(
        "timestamp",
        DateTime,
        server_default=db_now(),
        comment="Timestamp when the message was posted",
    )

    def to_public_dict(self) -> dict:
        """Serialize with the wire names used by the feed."""
        return {
            "id": self.id,
            "name": self.author_display_name,
            "message": self.body,
            "user_id": self.owner_user_id,
            "timestamp": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Message(id={self.id}, owner_user_id={self.owner_user_id})>"
