"""
Message API Routes - the shared feed and its owner-only mutations.

Reading the feed is open to everyone. Posting needs a session; editing and
deleting additionally need ownership of the message.
"""

from fastapi import APIRouter, Depends

from message_board.db_handlers import MessageDBHandler
from message_board.dependencies.auth import require_login
from message_board.dependencies.body import parsed_body
from message_board.dependencies.messages import require_ownership
from message_board.schemas import (
    DeleteMessageRequest,
    Identity,
    MessageOut,
    SubmitMessageRequest,
    SubmitResponse,
    SuccessResponse,
    UpdateMessageRequest,
)
from message_board.utils.logger import setup_logger

logger = setup_logger("api.messages")

router = APIRouter(tags=["Messages"])


@router.get("/messages", response_model=list[MessageOut])
async def list_messages(message_db_handler: MessageDBHandler = Depends()):
    """Every message, most recent first."""
    messages = await message_db_handler.list_all()
    return [MessageOut(**message.to_public_dict()) for message in messages]


@router.post("/submit", response_model=SubmitResponse)
async def submit_message(
    identity: Identity = Depends(require_login),
    request_data: SubmitMessageRequest = Depends(parsed_body(SubmitMessageRequest)),
    message_db_handler: MessageDBHandler = Depends(),
):
    """Post a message as the logged-in user."""
    message = await message_db_handler.create_message(
        author_display_name=identity.username,
        body=request_data.message,
        owner_user_id=identity.user_id,
    )
    return SubmitResponse(id=message.id)


@router.post("/update", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_message(
    identity: Identity = Depends(require_login),
    request_data: UpdateMessageRequest = Depends(parsed_body(UpdateMessageRequest)),
    message_db_handler: MessageDBHandler = Depends(),
):
    """Edit the body of one of the caller's own messages."""
    await require_ownership(request_data.id, identity, message_db_handler)
    await message_db_handler.update_body(request_data.id, request_data.message)
    logger.info(f"User {identity.user_id} updated message {request_data.id}")
    return SuccessResponse()


@router.post("/delete", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_message(
    identity: Identity = Depends(require_login),
    request_data: DeleteMessageRequest = Depends(parsed_body(DeleteMessageRequest)),
    message_db_handler: MessageDBHandler = Depends(),
):
    """Delete one of the caller's own messages."""
    await require_ownership(request_data.id, identity, message_db_handler)
    await message_db_handler.delete_by_id(request_data.id)
    logger.info(f"User {identity.user_id} deleted message {request_data.id}")
    return SuccessResponse()
