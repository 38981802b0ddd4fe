"""Shared test fixtures and hypothesis strategies for the client test suite."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest
from hypothesis import strategies as st

from homekrew_api.client.api_client import ApiClient
from homekrew_api.storage.credential_store import InMemoryCredentialStore

BASE_URL = "https://api.test"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def envelope(data: Any = None, message: str | None = None, **extra: Any) -> dict:
    """Build a server-side success envelope."""
    body: dict = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body


def json_response(status: int, body: Any) -> httpx.Response:
    return httpx.Response(status, json=body)


def make_client(
    handler: Handler,
    store: InMemoryCredentialStore | None = None,
    **kwargs: Any,
) -> ApiClient:
    """Client wired to an ``httpx.MockTransport`` running ``handler``."""
    return ApiClient(
        store=store if store is not None else InMemoryCredentialStore(),
        base_url=kwargs.pop("base_url", BASE_URL),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status: int = 200, body: Any = None, raises: Exception | None = None) -> None:
        self.status = status
        self.body = body if body is not None else envelope({"ok": True})
        self.raises = raises
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status, content=self.body)
        return httpx.Response(self.status, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

tokens = st.text(
    min_size=8,
    max_size=64,
    alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_.",
)
error_statuses = st.integers(min_value=400, max_value=599)
success_statuses = st.sampled_from([200, 201, 202, 203, 206])
_json_text = st.characters(blacklist_categories=("Cs",))
json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(alphabet=_json_text, max_size=20),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(alphabet=_json_text, min_size=1, max_size=8), children, max_size=4),
    max_leaves=10,
)
