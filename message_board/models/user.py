"""
User model for authentication and message ownership.

Accounts are append-only: usernames are unique (case-sensitive) and never
change after creation.
"""

from sqlalchemy import Column, String

from message_board.models.base import Base, CreatedAtMixin, IntegerIdMixin


class User(Base, IntegerIdMixin, CreatedAtMixin):
    """
    Registered account that can post, edit and delete its own messages.
    """

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    username = Column(
        String(255),
        unique=True,
        nullable=False,
        comment="Unique, case-sensitive login and display name",
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hash with embedded salt",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
