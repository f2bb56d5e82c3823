"""Strict whole-body JSON decoding for request payloads."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from catalog.core.config import get_settings
from catalog.core.errors import BadRequest

ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe_error(error: dict[str, Any]) -> str:
    field = str(error["loc"][0]) if error.get("loc") else "body"
    if error.get("type") == "extra_forbidden":
        return f'body contains unknown key "{field}"'
    if field == "runtime":
        return "invalid runtime format"
    return f'body contains incorrect JSON type for field "{field}"'


async def _read_limited(request: Request, max_bytes: int) -> bytes:
    too_large = BadRequest(f"body must not be larger than {max_bytes} bytes")
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise too_large

    # the declared length is optional, so the stream is bounded as well
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise too_large
    return bytes(body)


async def read_json(request: Request, model: type[ModelT]) -> ModelT:
    """Decode the request body into ``model`` or raise ``BadRequest``.

    The whole body must be exactly one JSON object: trailing bytes, unknown
    keys and wrongly typed values are rejected rather than ignored.
    """
    max_bytes = get_settings().max_body_bytes
    body = await _read_limited(request, max_bytes)
    if not body.strip():
        raise BadRequest("body must not be empty")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        if exc.msg == "Extra data":
            raise BadRequest("body must only contain a single JSON value") from exc
        raise BadRequest(
            f"body contains badly-formed JSON (at character {exc.pos})"
        ) from exc
    except UnicodeDecodeError as exc:
        raise BadRequest("body contains badly-formed JSON") from exc

    if not isinstance(payload, dict):
        raise BadRequest("body must contain a JSON object")

    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise BadRequest(_describe_error(exc.errors()[0])) from exc


def json_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a FastAPI dependency that decodes the body into ``model``."""

    async def _dependency(request: Request) -> ModelT:
        return await read_json(request, model)

    return _dependency
