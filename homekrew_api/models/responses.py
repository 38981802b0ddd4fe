"""Generic API response envelope model.

Every client call resolves to this envelope, whatever the outcome:
{ success: bool, data: T | None, status: int, message: str, error: ApiError | None }
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Closed set of failure classifications."""

    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    SERVER_ERROR = "SERVER_ERROR"
    UNKNOWN = "UNKNOWN"


class ApiError(BaseModel):
    """A classified failure. Built once per failed call and never mutated."""

    model_config = ConfigDict(frozen=True)

    message: str
    status: int
    code: ErrorCode
    details: Any = None


class PaginationMeta(BaseModel):
    """Pagination block returned by the list endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(default=1, alias="currentPage")
    has_next: bool = Field(default=False, alias="hasNext")
    has_prev: bool = Field(default=False, alias="hasPrev")
    total_count: int = Field(default=0, alias="totalCount")
    total_pages: int = Field(default=0, alias="totalPages")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all client responses."""

    success: bool
    data: T | None = None
    status: int
    message: str = ""
    error: ApiError | None = None
    pagination: PaginationMeta | None = None

    @model_validator(mode="after")
    def _success_excludes_error(self) -> "ApiResponse[T]":
        if self.success and self.error is not None:
            raise ValueError("a successful response cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("a failed response must carry an error")
        return self

    @classmethod
    def ok(
        cls,
        data: Any,
        status: int = 200,
        message: str = "Success",
        pagination: PaginationMeta | None = None,
    ) -> "ApiResponse[Any]":
        return cls(
            success=True,
            data=data,
            status=status,
            message=message,
            pagination=pagination,
        )

    @classmethod
    def fail(cls, error: ApiError, data: Any = None) -> "ApiResponse[Any]":
        return cls(
            success=False,
            data=data,
            status=error.status,
            message=error.message,
            error=error,
        )
