"""Uniform response envelope."""

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar
from uuid import uuid4

from pydantic import BaseModel, Field

T = TypeVar("T")


class ResponseMeta(BaseModel):
    """Per-response metadata."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    request_id: str = Field(default_factory=lambda: str(uuid4()))


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every API payload."""

    success: bool = True
    data: T | None = None
    message: str = ""
    errors: list[str] | None = None
    meta: ResponseMeta = Field(default_factory=ResponseMeta)


def ok(data: Any = None, message: str = "", request_id: str | None = None) -> ApiResponse:
    """Build a successful envelope."""
    meta = ResponseMeta(request_id=request_id) if request_id else ResponseMeta()
    return ApiResponse(success=True, data=data, message=message, meta=meta)


def error_body(
    message: str,
    errors: list[str] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """JSON-ready body for a failed request."""
    meta = ResponseMeta(request_id=request_id) if request_id else ResponseMeta()
    return ApiResponse[None](
        success=False,
        message=message,
        errors=errors or None,
        meta=meta,
    ).model_dump(mode="json")
