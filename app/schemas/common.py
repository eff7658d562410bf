"""Common schemas shared across the API."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform result envelope for mutations and authenticated reads."""

    success: bool
    data: T | None = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: T, message: str | None = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)


class OffsetPage(BaseModel):
    """Base offset/limit paginated payload."""

    total: int
    limit: int
    offset: int
    has_more: bool

    @classmethod
    def paginate(cls, *, total: int, limit: int, offset: int, **kwargs):
        """Build a page with ``has_more`` derived from the total."""
        return cls(
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + limit < total,
            **kwargs,
        )
