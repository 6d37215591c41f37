"""Uniform response envelope."""
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResponseEnvelope(BaseModel):
    """Wrapper returned by every endpoint, success or error."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    status_message: str
    data: Any = None
    error: str | None = None

    @classmethod
    def build(cls, status_code: int, data: Any = None, error: str | None = None) -> "ResponseEnvelope":
        """Create an envelope whose message is the status name, e.g. ``CREATED``."""
        return cls(
            status_code=status_code,
            status_message=HTTPStatus(status_code).name,
            data=data,
            error=error,
        )

    def to_content(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting empty ``data`` and ``error``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
