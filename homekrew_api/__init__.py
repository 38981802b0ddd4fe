"""Resilient async API client for the Homekrew backend."""

from homekrew_api.client import ApiClient, FilePart, JsonBody, MultipartBody
from homekrew_api.config import ClientSettings
from homekrew_api.logging_config import configure_logging, configure_logging_from_settings
from homekrew_api.models import ApiError, ApiResponse, ErrorCode, PaginationMeta
from homekrew_api.storage import (
    CredentialStore,
    FileCredentialStore,
    InMemoryCredentialStore,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "ClientSettings",
    "CredentialStore",
    "ErrorCode",
    "FileCredentialStore",
    "FilePart",
    "InMemoryCredentialStore",
    "JsonBody",
    "MultipartBody",
    "PaginationMeta",
    "configure_logging",
    "configure_logging_from_settings",
]
