"""Failure classification.

``classify_failure`` is a pure function of (timed out?, status, body) and
maps every transport outcome to exactly one ``ApiError``. Rules, in order:

- timeout                 -> 408 TIMEOUT
- no response at all      -> 0   NETWORK_ERROR
- 400                     -> VALIDATION_ERROR (server message if present)
- 401                     -> UNAUTHORIZED
- 403                     -> FORBIDDEN (server message if present)
- 404                     -> NOT_FOUND
- 500                     -> SERVER_ERROR
- anything else           -> UNKNOWN (server message if present, raw body in details)

Session invalidation on 401 is NOT performed here; see ``client.session``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from homekrew_api.models.responses import ApiError, ErrorCode

ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NETWORK_ERROR: "Network error. Please check your internet connection.",
    ErrorCode.TIMEOUT: "Request timeout. Please try again.",
    ErrorCode.SERVER_ERROR: "Server error. Please try again later.",
    ErrorCode.UNAUTHORIZED: "Unauthorized. Please login again.",
    ErrorCode.FORBIDDEN: "Access denied.",
    ErrorCode.NOT_FOUND: "Resource not found.",
    ErrorCode.VALIDATION_ERROR: "Validation error.",
    ErrorCode.UNKNOWN: "An unexpected error occurred.",
}

TIMEOUT_STATUS = 408
NO_RESPONSE_STATUS = 0


@dataclass(frozen=True)
class TransportFailure:
    """Classifier input extracted from a transport exception."""

    timed_out: bool = False
    status: int | None = None
    body: Any = None


def _server_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def classify_failure(
    timed_out: bool = False,
    status: int | None = None,
    body: Any = None,
) -> ApiError:
    """Map a failed transport outcome to one ``ApiError``."""
    if timed_out:
        return ApiError(
            message=ERROR_MESSAGES[ErrorCode.TIMEOUT],
            status=TIMEOUT_STATUS,
            code=ErrorCode.TIMEOUT,
        )
    if status is None:
        return ApiError(
            message=ERROR_MESSAGES[ErrorCode.NETWORK_ERROR],
            status=NO_RESPONSE_STATUS,
            code=ErrorCode.NETWORK_ERROR,
        )

    if status == 400:
        return ApiError(
            message=_server_message(body) or ERROR_MESSAGES[ErrorCode.VALIDATION_ERROR],
            status=status,
            code=ErrorCode.VALIDATION_ERROR,
            details=body,
        )
    if status == 401:
        return ApiError(
            message=ERROR_MESSAGES[ErrorCode.UNAUTHORIZED],
            status=status,
            code=ErrorCode.UNAUTHORIZED,
        )
    if status == 403:
        return ApiError(
            message=_server_message(body) or ERROR_MESSAGES[ErrorCode.FORBIDDEN],
            status=status,
            code=ErrorCode.FORBIDDEN,
        )
    if status == 404:
        return ApiError(
            message=ERROR_MESSAGES[ErrorCode.NOT_FOUND],
            status=status,
            code=ErrorCode.NOT_FOUND,
        )
    if status == 500:
        return ApiError(
            message=ERROR_MESSAGES[ErrorCode.SERVER_ERROR],
            status=status,
            code=ErrorCode.SERVER_ERROR,
        )
    return ApiError(
        message=_server_message(body) or ERROR_MESSAGES[ErrorCode.UNKNOWN],
        status=status,
        code=ErrorCode.UNKNOWN,
        details=body,
    )


def decode_body(response: httpx.Response) -> Any:
    """Return the parsed JSON body, falling back to text (or None when empty)."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def describe_transport_failure(exc: Exception) -> TransportFailure:
    """Translate an httpx exception into classifier input.

    Anything that is not a timeout or an HTTP status error is treated as
    "no response received".
    """
    if isinstance(exc, httpx.TimeoutException):
        return TransportFailure(timed_out=True)
    if isinstance(exc, httpx.HTTPStatusError):
        return TransportFailure(
            status=exc.response.status_code,
            body=decode_body(exc.response),
        )
    return TransportFailure()
