"""
Error taxonomy for the message board.

Every request-level failure is raised as a ``MessageBoardError`` subclass and
converted into a JSON response of the form ``{"error": ..., "code": ...}`` by
the exception handlers registered in ``main.create_app``.
"""

from fastapi import status


class MessageBoardError(Exception):
    """Base class for failures that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class InvalidInput(MessageBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"
    default_message = "Invalid input."


class DuplicateUsername(MessageBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_username"
    default_message = "Username already taken."


class InvalidCredentials(MessageBoardError):
    # Same message whether the user is unknown or the password is wrong
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_credentials"
    default_message = "Invalid credentials."


class Unauthorized(MessageBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    default_message = "Unauthorized. Please log in."


class Forbidden(MessageBoardError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Not allowed."


class NotFound(MessageBoardError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Message not found."


class StorageError(MessageBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "storage_error"
    default_message = "DB error."


__all__ = [
    "MessageBoardError",
    "InvalidInput",
    "DuplicateUsername",
    "InvalidCredentials",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "StorageError",
]
