from message_board.db_handlers import MessageDBHandler
from message_board.errors import Forbidden, NotFound
from message_board.models import Message
from message_board.schemas import Identity
from message_board.utils.logger import setup_logger

logger = setup_logger("dependencies.messages")


async def require_ownership(
    message_id: int,
    identity: Identity,
    message_db_handler: MessageDBHandler,
) -> Message:
    """
    Load a message and check that ``identity`` owns it.

    Raises NotFound if the message does not exist, Forbidden if it is a
    legacy message without an owner or belongs to someone else. The result
    is advisory: the mutation that follows re-checks existence itself.
    """
    message = await message_db_handler.get(message_id)

    if message is None:
        raise NotFound()

    if message.owner_user_id is None:
        logger.info(
            f"User {identity.user_id} denied on legacy message {message_id}"
        )
        raise Forbidden()

    if message.owner_user_id != identity.user_id:
        logger.info(
            f"User {identity.user_id} denied on message {message_id} owned by {message.owner_user_id}"
        )
        raise Forbidden()

    return message
