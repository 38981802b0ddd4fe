"""Shared helpers for the per-domain service adapters.

Each service is a thin adapter: it calls an ``ApiClient`` verb under a fixed
base path and re-shapes the ``ApiResponse`` into its own domain data. Failed
responses are passed through with the service's fallback message.
"""

from __future__ import annotations

import logging
from typing import Any

from homekrew_api.client.api_client import ApiClient
from homekrew_api.models.responses import ApiResponse, PaginationMeta

logger = logging.getLogger(__name__)


class BaseService:
    """Base adapter that all domain services extend.

    Subclasses set ``resource`` to the path segment under the API prefix
    (e.g. ``"user"``); an empty value means the prefix itself. The prefix
    defaults to the client's ``api_prefix``.
    """

    resource: str = ""

    def __init__(self, client: ApiClient, api_prefix: str | None = None) -> None:
        self._client = client
        if api_prefix is None:
            api_prefix = client.api_prefix
        self._api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""

    @property
    def client(self) -> ApiClient:
        return self._client

    def _path(self, *segments: str) -> str:
        parts = [self._api_prefix.strip("/"), self.resource.strip("/")]
        parts.extend(str(segment).strip("/") for segment in segments)
        return "/" + "/".join(part for part in parts if part)

    @staticmethod
    def _params(**values: Any) -> dict[str, Any]:
        """Drop unset query values; booleans are sent as ``true``/``false``."""
        params: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            params[key] = str(value).lower() if isinstance(value, bool) else value
        return params

    @staticmethod
    def _failure(response: ApiResponse[Any], fallback_message: str | None = None) -> ApiResponse[Any]:
        """Propagate a failed response, keeping whatever data it carried."""
        return ApiResponse(
            success=False,
            data=response.data,
            status=response.status,
            message=response.message or fallback_message or "",
            error=response.error,
        )

    @staticmethod
    def _pagination(data: Any) -> PaginationMeta | None:
        if isinstance(data, dict) and isinstance(data.get("pagination"), dict):
            return PaginationMeta.model_validate(data["pagination"])
        return None

    @staticmethod
    def _field(data: Any, name: str) -> Any:
        """Return ``data[name]`` when ``data`` is a mapping, else ``None``."""
        if isinstance(data, dict):
            return data.get(name)
        return None
