"""
Request body parsing that accepts JSON as well as HTML form posts.
"""

import json
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from message_board.errors import InvalidInput

ModelType = TypeVar("ModelType", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise InvalidInput("Malformed JSON body.") from e
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be an object.")
    return data


def parsed_body(model: type[ModelType]):
    """Dependency factory validating the request body against ``model``."""

    async def dependency(request: Request) -> ModelType:
        data = await read_body(request)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            raise InvalidInput(f"Invalid or missing field(s): {fields}.") from e

    return dependency
