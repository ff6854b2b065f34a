from __future__ import annotations

import asyncio
from functools import wraps
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from message_board import db as app_db
from message_board.config import settings
from message_board.models.base import Base
from message_board.utils.logger import setup_logger
from message_board.utils.retry_utils import is_retryable_db_error

logger = setup_logger("db_handlers")


# Define generic types for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


def check_local_db(func):
    """Database session decorator with transaction management and retry logic."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        # If 'db' is already provided, we're in a nested call.
        # The outermost caller who created the session owns the transaction.
        if kwargs.get("db"):
            return await func(*args, **kwargs)

        max_attempts = max(settings.db_max_retries, 1)
        last_exception = None
        for attempt in range(max_attempts):
            async with app_db.AppAsyncSessionLocal() as db:
                kwargs["db"] = db
                try:
                    result = await func(*args, **kwargs)
                    await db.commit()
                    return result
                except Exception as e:
                    await db.rollback()
                    if not is_retryable_db_error(e):
                        raise
                    last_exception = e
                    logger.warning(
                        f"Transient error in {func.__name__} (attempt {attempt + 1}/{max_attempts}): {e}. Retrying..."
                    )
                    await asyncio.sleep(0.1 * (2**attempt))

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise last_exception

    return wrapper


class BaseDBHandler(Generic[ModelType]):
    """Generic handler for database operations with basic CRUD methods."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    @check_local_db
    async def create(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        """Add a new record; the outermost unit of work commits it."""

        db_obj = self.model(**obj_dict)
        try:
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"IntegrityError creating {self.model.__name__}: {e}")
            # Re-raise IntegrityError so calling code can handle it specifically
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}", exc_info=True)
            raise

    @check_local_db
    async def get(self, id: Any, *, db: AsyncSession = None) -> ModelType | None:
        """Get a single record by its primary key."""
        stmt = select(self.model).where(self.model.id == id)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def get_by_attributes(
        self, *, db: AsyncSession = None, **kwargs
    ) -> ModelType | None:
        """Get a single record by a set of attributes."""
        stmt = select(self.model).filter_by(**kwargs)
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def get_multi_by_attributes(
        self, *, db: AsyncSession = None, **kwargs
    ) -> list[ModelType]:
        """Get every record matching a set of attributes, optionally ordered."""
        order_by_clauses = kwargs.pop("order_by", None)

        stmt = select(self.model).filter_by(**kwargs)

        if order_by_clauses is not None:
            if isinstance(order_by_clauses, list):
                stmt = stmt.order_by(*order_by_clauses)
            else:
                stmt = stmt.order_by(order_by_clauses)

        result = await db.execute(stmt)
        return list(result.scalars().all())
