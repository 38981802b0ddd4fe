"""API client: orchestration, request assembly and failure classification."""

from homekrew_api.client.api_client import ApiClient
from homekrew_api.client.envelope import (
    FilePart,
    JsonBody,
    MultipartBody,
    RequestEnvelope,
    build_envelope,
)
from homekrew_api.client.errors import ERROR_MESSAGES, classify_failure
from homekrew_api.client.session import SessionInvalidator

__all__ = [
    "ERROR_MESSAGES",
    "ApiClient",
    "FilePart",
    "JsonBody",
    "MultipartBody",
    "RequestEnvelope",
    "SessionInvalidator",
    "build_envelope",
    "classify_failure",
]
