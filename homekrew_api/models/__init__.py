"""Public models for the API client."""

from homekrew_api.models.responses import (
    ApiError,
    ApiResponse,
    ErrorCode,
    PaginationMeta,
)

__all__ = [
    "ApiError",
    "ApiResponse",
    "ErrorCode",
    "PaginationMeta",
]
