from __future__ import annotations

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from message_board.db_handlers.base import BaseDBHandler, check_local_db
from message_board.errors import InvalidInput, NotFound
from message_board.models.message import Message
from message_board.utils.logger import setup_logger

logger = setup_logger("db_handlers.message")


def normalize_body(body: str | None) -> str:
    """Trim a message body, rejecting bodies that are empty once trimmed."""
    if not isinstance(body, str) or not body.strip():
        raise InvalidInput("Message required.")
    return body.strip()


class MessageDBHandler(BaseDBHandler[Message]):
    """
    Storage for feed messages.

    ``update_body`` and ``delete_by_id`` judge existence by the affected row
    count of their own statement, so a row removed after an ownership check
    still yields ``NotFound``.
    """

    def __init__(self):
        super().__init__(Message)

    @check_local_db
    async def create_message(
        self,
        author_display_name: str,
        body: str,
        owner_user_id: int | None,
        *,
        db: AsyncSession = None,
    ) -> Message:
        """Insert a message; the id and timestamp are assigned by the store."""
        message = await self.create(
            {
                "author_display_name": author_display_name,
                "body": normalize_body(body),
                "owner_user_id": owner_user_id,
            },
            db=db,
        )
        logger.info(f"Created message {message.id} for user_id={owner_user_id}")
        return message

    @check_local_db
    async def list_all(self, *, db: AsyncSession = None) -> list[Message]:
        """All messages, most recent first."""
        return await self.get_multi_by_attributes(
            db=db, order_by=Message.id.desc()
        )

    @check_local_db
    async def update_body(
        self, message_id: int, new_body: str, *, db: AsyncSession = None
    ) -> Message:
        """Overwrite only the body of a message."""
        stmt = (
            update(Message)
            .where(Message.id == message_id)
            .values(body=normalize_body(new_body))
        )
        result = await db.execute(stmt)
        if result.rowcount == 0:
            logger.info(f"Update of message {message_id} affected no rows")
            raise NotFound()
        return await self.get(message_id, db=db)

    @check_local_db
    async def delete_by_id(self, message_id: int, *, db: AsyncSession = None) -> None:
        """Delete a message by id."""
        result = await db.execute(delete(Message).where(Message.id == message_id))
        if result.rowcount == 0:
            logger.info(f"Delete of message {message_id} affected no rows")
            raise NotFound()
