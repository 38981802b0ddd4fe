"""Unit tests for the response envelope models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from homekrew_api.models.responses import (
    ApiError,
    ApiResponse,
    ErrorCode,
    PaginationMeta,
)


class TestApiResponse:
    def test_ok(self) -> None:
        resp = ApiResponse.ok({"id": 1})
        assert resp.success is True
        assert resp.status == 200
        assert resp.message == "Success"
        assert resp.error is None

    def test_fail_mirrors_error(self) -> None:
        error = ApiError(message="Resource not found.", status=404, code=ErrorCode.NOT_FOUND)
        resp = ApiResponse.fail(error)
        assert resp.success is False
        assert resp.status == 404
        assert resp.message == "Resource not found."
        assert resp.data is None
        assert resp.error == error

    def test_success_with_error_rejected(self) -> None:
        error = ApiError(message="x", status=500, code=ErrorCode.SERVER_ERROR)
        with pytest.raises(ValidationError):
            ApiResponse(success=True, status=200, error=error)

    def test_failure_without_error_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ApiResponse(success=False, status=500)

    def test_serializes_error_code_as_string(self) -> None:
        error = ApiError(message="x", status=0, code=ErrorCode.NETWORK_ERROR)
        dumped = ApiResponse.fail(error).model_dump(mode="json")
        assert dumped["error"]["code"] == "NETWORK_ERROR"

    def test_api_error_is_immutable(self) -> None:
        error = ApiError(message="x", status=0, code=ErrorCode.NETWORK_ERROR)
        with pytest.raises(ValidationError):
            error.status = 500  # type: ignore[misc]


class TestPaginationMeta:
    def test_parses_camel_case(self) -> None:
        meta = PaginationMeta.model_validate(
            {"currentPage": 2, "hasNext": True, "hasPrev": True, "totalCount": 41, "totalPages": 5}
        )
        assert meta.current_page == 2
        assert meta.has_next is True
        assert meta.total_count == 41
        assert meta.total_pages == 5

    def test_dumps_by_alias(self) -> None:
        meta = PaginationMeta(current_page=1)
        assert meta.model_dump(by_alias=True)["currentPage"] == 1


def test_error_code_set_is_closed() -> None:
    assert {code.value for code in ErrorCode} == {
        "TIMEOUT",
        "NETWORK_ERROR",
        "VALIDATION_ERROR",
        "UNAUTHORIZED",
        "FORBIDDEN",
        "NOT_FOUND",
        "SERVER_ERROR",
        "UNKNOWN",
    }
