from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from message_board.db_handlers.base import BaseDBHandler, check_local_db
from message_board.models.session import Session
from message_board.utils.logger import setup_logger

logger = setup_logger("db_handlers.session")


class SessionDBHandler(BaseDBHandler[Session]):
    def __init__(self):
        super().__init__(Session)

    @check_local_db
    async def get_active_by_digest(
        self, token_digest: str, now: datetime, *, db: AsyncSession = None
    ) -> Session | None:
        """Get an unexpired session by token digest."""
        stmt = select(Session).where(
            Session.token_digest == token_digest,
            Session.expires_at > now,
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @check_local_db
    async def delete_by_digest(
        self, token_digest: str, *, db: AsyncSession = None
    ) -> int:
        """Delete a session by token digest. Returns the number of rows removed."""
        result = await db.execute(
            delete(Session).where(Session.token_digest == token_digest)
        )
        return result.rowcount

    @check_local_db
    async def delete_expired(self, now: datetime, *, db: AsyncSession = None) -> int:
        """Delete every session whose expiry has passed."""
        result = await db.execute(delete(Session).where(Session.expires_at <= now))
        return result.rowcount
