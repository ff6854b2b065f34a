"""
Base configurations and mixins for database models.

All models share ``Base`` and use integer autoincrement primary keys so ids
are monotonic.
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now


def utcnow() -> datetime:
    """Naive UTC now; stored datetimes are naive UTC on every backend."""
    return datetime.now(UTC).replace(tzinfo=None)


# Create the base class for all models
Base = declarative_base()


class IntegerIdMixin:
    """Autoincrement integer primary key."""

    id = Column(Integer, primary_key=True, autoincrement=True)


class CreatedAtMixin:
    """Creation timestamp filled by the database, like ``DEFAULT CURRENT_TIMESTAMP``."""

    created_at = Column(
        DateTime,
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )


__all__ = ["Base", "IntegerIdMixin", "CreatedAtMixin", "utcnow"]
