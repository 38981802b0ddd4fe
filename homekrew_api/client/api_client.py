"""Resilient HTTP client for the Homekrew backend.

Every screen and service module talks to the backend through ``ApiClient``.
``request`` (and the verb wrappers built on it) is total: it reads the
current credential, assembles the request, dispatches it over httpx and
always resolves to one ``ApiResponse``. Transport and HTTP failures are
classified by ``client.errors`` and returned as data, never raised.

A 401 triggers session invalidation through ``SessionInvalidator`` before
the response is returned.

SECURITY: Never logs tokens or request headers.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from homekrew_api.client.envelope import (
    MultipartBody,
    RequestEnvelope,
    as_body,
    bearer_value,
    build_envelope,
)
from homekrew_api.client.errors import (
    TransportFailure,
    classify_failure,
    decode_body,
    describe_transport_failure,
)
from homekrew_api.client.session import SessionInvalidator
from homekrew_api.config.settings import ClientSettings
from homekrew_api.exceptions import DownloadError
from homekrew_api.models.responses import ApiError, ApiResponse, ErrorCode
from homekrew_api.storage.credential_store import CredentialStore, FileCredentialStore

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Success"


class ApiClient:
    """Async API client with uniform response envelopes.

    Parameters
    ----------
    store:
        Credential store read once per outgoing request.
    base_url:
        Base URL prepended to relative request paths.
    timeout_seconds:
        Per-call timeout enforced by the transport (default 30).
    device_id:
        Optional identifier sent as ``X-Device-ID`` on every request.
    send_empty_bearer:
        Attach ``Authorization: Bearer`` even when no token is stored.
    api_prefix:
        Path prefix the domain services put in front of their resources.
    transport:
        Optional httpx transport (tests inject ``httpx.MockTransport``).
    """

    def __init__(
        self,
        store: CredentialStore,
        base_url: str = "",
        timeout_seconds: float = 30.0,
        device_id: str | None = None,
        send_empty_bearer: bool = True,
        api_prefix: str = "/api/v1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._store = store
        self._api_prefix = api_prefix
        self._send_empty_bearer = send_empty_bearer
        self._default_token: str | None = None

        default_headers = {"Accept": "application/json"}
        if device_id:
            default_headers["X-Device-ID"] = device_id

        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=default_headers,
            transport=transport,
            follow_redirects=True,
            event_hooks={"request": [self._stamp_default_token]},
        )
        self._session = SessionInvalidator(store, self.remove_auth_token)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        store: CredentialStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ApiClient":
        """Build a client from ``ClientSettings``, defaulting to a file-backed store."""
        return cls(
            store=store or FileCredentialStore(settings.credential_store_path),
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            device_id=settings.device_id,
            send_empty_bearer=settings.send_empty_bearer,
            api_prefix=settings.api_prefix,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Lifecycle / accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> CredentialStore:
        return self._store

    @property
    def session(self) -> SessionInvalidator:
        return self._session

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    @property
    def api_prefix(self) -> str:
        return self._api_prefix

    @property
    def http_client(self) -> httpx.AsyncClient:
        """The underlying httpx client (for advanced usage)."""
        return self._http

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_base_url(self, base_url: str) -> None:
        self._http.base_url = base_url

    def set_auth_token(self, token: str) -> None:
        """Stamp every following request with ``token`` until replaced or removed."""
        self._default_token = token

    def remove_auth_token(self) -> None:
        self._default_token = None

    async def _stamp_default_token(self, request: httpx.Request) -> None:
        if self._default_token:
            request.headers["Authorization"] = bearer_value(self._default_token)

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    async def _prepare(
        self,
        method: str,
        url: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> RequestEnvelope:
        # Read per call; never reuse a token across awaits.
        token = await self._store.get()
        return build_envelope(
            method,
            url,
            token,
            body=as_body(data),
            headers=headers,
            params=params,
            timeout=timeout,
            send_empty_bearer=self._send_empty_bearer,
        )

    async def _send(self, envelope: RequestEnvelope) -> httpx.Response:
        logger.debug(
            "Dispatching %s %s",
            envelope.method,
            envelope.url,
            extra={
                "request_id": envelope.request_id,
                "method": envelope.method,
                "url": envelope.url,
                "is_multipart": envelope.is_multipart,
            },
        )
        response = await self._http.request(
            envelope.method, envelope.url, **envelope.transport_kwargs()
        )
        response.raise_for_status()
        return response

    def _classify(
        self,
        failure: TransportFailure,
        method: str,
        url: str,
        request_id: str | None,
        started: float,
    ) -> tuple[ApiError, bool]:
        """Classify a failure and report whether the session must be invalidated."""
        error = classify_failure(failure.timed_out, failure.status, failure.body)
        logger.warning(
            "API error for %s %s: %s (%d)",
            method.upper(),
            url,
            error.code.value,
            error.status,
            extra={
                "request_id": request_id,
                "method": method.upper(),
                "url": url,
                "status": error.status,
                "error_code": error.code.value,
                "duration_ms": round((time.monotonic() - started) * 1000, 2),
            },
        )
        return error, error.code is ErrorCode.UNAUTHORIZED

    async def _invalidate_session(self) -> None:
        try:
            await self._session.invalidate()
        except Exception:
            # The 401 response is returned whatever the store raised.
            logger.exception("Failed to clear stored credential after 401")

    async def request(
        self,
        method: str,
        url: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> ApiResponse[Any]:
        """Send one request and resolve to an ``ApiResponse``. Never raises.

        On success the server envelope is unwrapped: when the body has a
        ``data`` key its value becomes the returned data, even if that value
        is falsy (``{"data": null}`` gives ``None``). Otherwise the whole
        body is returned. The message is the server's ``message`` or ``"Success"``.
        """
        started = time.monotonic()
        request_id: str | None = None

        try:
            envelope = await self._prepare(method, url, data, headers, params, timeout)
            request_id = envelope.request_id
            response = await self._send(envelope)
        except httpx.HTTPError as exc:
            failure = describe_transport_failure(exc)
        except Exception:
            # Local failure before any response arrived (e.g. an unencodable body).
            logger.exception(
                "Request %s %s failed before a response was received",
                method.upper(),
                url,
                extra={"request_id": request_id},
            )
            failure = TransportFailure()
        else:
            return self._unwrap(response, request_id, started)

        error, session_invalidated = self._classify(
            failure, method, url, request_id, started
        )
        if session_invalidated:
            await self._invalidate_session()
        return ApiResponse.fail(error)

    def _unwrap(
        self, response: httpx.Response, request_id: str | None, started: float
    ) -> ApiResponse[Any]:
        body = decode_body(response)
        data = body
        message = DEFAULT_SUCCESS_MESSAGE
        if isinstance(body, dict):
            if "data" in body:
                data = body["data"]
            server_message = body.get("message")
            if isinstance(server_message, str) and server_message:
                message = server_message

        logger.debug(
            "Response %d for %s %s",
            response.status_code,
            response.request.method,
            response.request.url.path,
            extra={
                "request_id": request_id,
                "status": response.status_code,
                "duration_ms": round((time.monotonic() - started) * 1000, 2),
            },
        )
        return ApiResponse.ok(data, status=response.status_code, message=message)

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    async def get(self, url: str, **options: Any) -> ApiResponse[Any]:
        return await self.request("GET", url, **options)

    async def post(self, url: str, data: Any = None, **options: Any) -> ApiResponse[Any]:
        return await self.request("POST", url, data, **options)

    async def put(self, url: str, data: Any = None, **options: Any) -> ApiResponse[Any]:
        return await self.request("PUT", url, data, **options)

    async def patch(self, url: str, data: Any = None, **options: Any) -> ApiResponse[Any]:
        return await self.request("PATCH", url, data, **options)

    async def delete(self, url: str, **options: Any) -> ApiResponse[Any]:
        return await self.request("DELETE", url, **options)

    async def upload(
        self, url: str, form: MultipartBody, method: str = "POST", **options: Any
    ) -> ApiResponse[Any]:
        """POST (or PUT) a multipart body; the transport sets the boundary."""
        return await self.request(method, url, form, **options)

    async def download(self, url: str, **options: Any) -> bytes:
        """Fetch a binary payload and return the raw bytes.

        Unlike the other verbs this bypasses the envelope: there is no
        structured body to unwrap. Failures are classified the same way
        and raised as ``DownloadError``.
        """
        started = time.monotonic()
        headers = {"Accept": "*/*", **(options.pop("headers", None) or {})}
        request_id: str | None = None

        try:
            envelope = await self._prepare("GET", url, headers=headers, **options)
            request_id = envelope.request_id
            response = await self._send(envelope)
        except httpx.HTTPError as exc:
            error, session_invalidated = self._classify(
                describe_transport_failure(exc), "GET", url, request_id, started
            )
            if session_invalidated:
                await self._invalidate_session()
            raise DownloadError(error) from exc

        return response.content
