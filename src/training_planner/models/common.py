"""Response envelopes shared by all endpoints."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Single-resource response envelope."""
    data: T


class ApiListResponse(BaseModel, Generic[T]):
    """List response envelope."""
    data: List[T]
    page: int
    per_page: int
    total: int
