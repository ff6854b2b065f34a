from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from message_board.db_handlers.base import BaseDBHandler, check_local_db
from message_board.models.user import User


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self):
        super().__init__(User)

    @check_local_db
    async def get_user_by_username(
        self, username: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by exact, case-sensitive username."""
        return await self.get_by_attributes(username=username, db=db)
