"""
Login session records.

Only the HMAC digest of a session token is stored, so a copy of the database
does not hand out live sessions. Sessions are not tied to the lifetime of the
user row they reference.
"""

from sqlalchemy import Column, DateTime, Index, Integer, String

from message_board.models.base import Base, IntegerIdMixin, utcnow


class Session(Base, IntegerIdMixin):
    """A session issued at login or signup."""

    __tablename__ = "sessions"
    __table_args__ = (Index("ix_sessions_user_id", "user_id"),)

    token_digest = Column(
        String(64),
        unique=True,
        nullable=False,
        comment="Hex HMAC-SHA256 of the session token",
    )

    user_id = Column(Integer, nullable=False, comment="User the session belongs to")

    username = Column(
        String(255),
        nullable=False,
        comment="Display name cached at issue time",
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)

    expires_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Session(id={self.id}, user_id={self.user_id}, expires_at={self.expires_at})>"
