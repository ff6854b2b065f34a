from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    # Emptiness is checked by the registry/session manager, not here,
    # so that blank fields get the same error as missing ones.
    username: str | None = Field(default=None, description="Account username")
    password: str | None = Field(default=None, description="Account password")


class SubmitMessageRequest(BaseModel):
    message: str | None = Field(default=None, description="Message text")


class UpdateMessageRequest(BaseModel):
    id: int = Field(..., description="Id of the message to edit")
    message: str | None = Field(default=None, description="New message text")


class DeleteMessageRequest(BaseModel):
    id: int = Field(..., description="Id of the message to delete")


class Identity(BaseModel):
    """The user a request acts as, resolved from its session."""

    user_id: int
    username: str

    model_config = ConfigDict(frozen=True)


class IssuedSession(BaseModel):
    token: str = Field(..., description="Raw session token; only ever sent in the cookie")
    user_id: int
    username: str
    expires_at: datetime


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    username: str


class SuccessResponse(BaseModel):
    success: bool = True
    message: str | None = None


class SubmitResponse(BaseModel):
    success: bool = True
    id: int


class MeResponse(BaseModel):
    id: int
    username: str


class MessageOut(BaseModel):
    id: int
    name: str | None
    message: str | None
    user_id: int | None
    timestamp: str | None
