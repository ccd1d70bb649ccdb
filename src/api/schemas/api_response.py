from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every response body of the catalog API."""

    success: bool
    message: str = ""
    data: T | None = None
    errors: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=_utcnow)


def success_result(data: Any = None, message: str = "Operation completed successfully.") -> ApiResponse:  # type: ignore[type-arg]
    return ApiResponse(success=True, message=message, data=data)


def error_result(message: str, errors: list[str] | None = None) -> ApiResponse:  # type: ignore[type-arg]
    return ApiResponse(success=False, message=message, errors=errors or [])
