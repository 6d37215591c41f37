"""Helpers wrapping payloads in the response envelope."""
from typing import Any

from fastapi import Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from taskmanager.schemas.response import ResponseEnvelope


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


def envelope_response(
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
    error: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON response carrying the standard envelope."""
    envelope = ResponseEnvelope.build(status_code, data=_dump(data), error=error)
    return JSONResponse(status_code=status_code, content=envelope.to_content(), headers=headers)


def no_content_response() -> Response:
    """204 responses carry no body."""
    return Response(status_code=status.HTTP_204_NO_CONTENT)
