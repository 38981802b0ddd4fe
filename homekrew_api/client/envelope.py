"""Outgoing request assembly.

Bodies are an explicit tagged variant: ``JsonBody`` is serialized by the
transport as JSON, ``MultipartBody`` is handed to httpx as form parts so
the transport encodes the bytes and sets its own multipart boundary.
No Content-Type is ever forced onto a multipart request.

The Authorization header is built from the token read at call time and
is never cached between calls.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Union

from homekrew_api.exceptions import InvalidBodyError

JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


@dataclass(frozen=True)
class JsonBody:
    """A JSON-serializable request body."""

    value: Any
    is_multipart: ClassVar[bool] = False

    def transport_kwargs(self) -> dict[str, Any]:
        return {"json": self.value}


@dataclass(frozen=True)
class FilePart:
    """A single binary part of a multipart body."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class MultipartBody:
    """A multipart/form-data body of plain fields and file parts."""

    fields: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, FilePart] = field(default_factory=dict)
    is_multipart: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if not self.fields and not self.files:
            raise InvalidBodyError("Multipart body needs at least one field or file part")

    def transport_kwargs(self) -> dict[str, Any]:
        # Plain fields are sent as filename-less parts so httpx always
        # produces multipart encoding, never urlencoded.
        parts: list[tuple[str, tuple[str | None, Any] | tuple[str, bytes, str]]] = [
            (name, (None, value)) for name, value in self.fields.items()
        ]
        parts.extend(
            (name, (part.filename, part.content, part.content_type))
            for name, part in self.files.items()
        )
        return {"files": parts}


RequestBody = Union[JsonBody, MultipartBody]


def as_body(data: Any) -> RequestBody | None:
    """Wrap a raw value in ``JsonBody``; tagged bodies pass through unchanged."""
    if data is None:
        return None
    if isinstance(data, (JsonBody, MultipartBody)):
        return data
    return JsonBody(data)


@dataclass(frozen=True)
class RequestEnvelope:
    """A fully assembled request. Built fresh per call and never reused."""

    method: str
    url: str
    headers: dict[str, str]
    body: RequestBody | None = None
    params: Mapping[str, Any] | None = None
    timeout: float | None = None

    @property
    def is_multipart(self) -> bool:
        return self.body is not None and self.body.is_multipart

    @property
    def request_id(self) -> str:
        return self.headers["X-Request-ID"]

    def transport_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.request``."""
        kwargs: dict[str, Any] = {"headers": self.headers}
        if self.body is not None:
            kwargs.update(self.body.transport_kwargs())
        if self.params is not None:
            kwargs["params"] = self.params
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs


def _without(headers: dict[str, str], name: str) -> dict[str, str]:
    lowered = name.lower()
    return {key: value for key, value in headers.items() if key.lower() != lowered}


def _has(headers: Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(key.lower() == lowered for key in headers)


def bearer_value(token: str | None) -> str:
    """``Bearer <token>``, or the bare scheme when there is no token."""
    return f"Bearer {token}" if token else "Bearer"


def build_envelope(
    method: str,
    url: str,
    token: str | None,
    body: RequestBody | None = None,
    headers: Mapping[str, str] | None = None,
    params: Mapping[str, Any] | None = None,
    timeout: float | None = None,
    send_empty_bearer: bool = True,
) -> RequestEnvelope:
    """Merge caller options with the current credential into a ``RequestEnvelope``.

    Parameters
    ----------
    token:
        The credential read for this call. ``None`` or empty sends
        ``Authorization: Bearer`` when ``send_empty_bearer`` is set and
        omits the header otherwise.
    send_empty_bearer:
        Whether an absent token still produces an Authorization header.
    """
    merged: dict[str, str] = dict(headers or {})

    if body is not None and body.is_multipart:
        merged = _without(merged, "Content-Type")
    elif body is not None and not _has(merged, "Content-Type"):
        merged["Content-Type"] = JSON_CONTENT_TYPE

    merged = _without(merged, "Authorization")
    if token or send_empty_bearer:
        merged["Authorization"] = bearer_value(token)

    request_id = next(
        (value for key, value in merged.items() if key.lower() == "x-request-id"),
        None,
    )
    merged = _without(merged, "X-Request-ID")
    merged["X-Request-ID"] = request_id or str(uuid.uuid4())

    return RequestEnvelope(
        method=method.upper(),
        url=url,
        headers=merged,
        body=body,
        params=params,
        timeout=timeout,
    )
