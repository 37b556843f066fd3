"""Shared / generic schemas."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Standard error envelope for domain errors."""

    success: bool = False
    error_code: str
    message: str
    details: dict[str, Any] | None = None


class DataResponse(BaseModel, Generic[T]):
    """Success wrapper: ``{message, data}``."""

    message: str = "ok"
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Success wrapper for collections: ``{message, count, data}``."""

    message: str = "ok"
    count: int
    data: list[T]
