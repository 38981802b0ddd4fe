"""Unit tests for outgoing request assembly."""

from __future__ import annotations

import uuid

import pytest

from homekrew_api.client.envelope import (
    FilePart,
    JsonBody,
    MultipartBody,
    as_body,
    bearer_value,
    build_envelope,
)
from homekrew_api.exceptions import InvalidBodyError


@pytest.fixture
def image_form() -> MultipartBody:
    return MultipartBody(
        fields={"caption": "me"},
        files={"image": FilePart("avatar.png", b"\x89PNG\r\n\x1a\n\x00\x01", "image/png")},
    )


class TestTokenInjection:
    def test_attaches_bearer_token(self) -> None:
        env = build_envelope("get", "/user/current-user", "tok-123")
        assert env.headers["Authorization"] == "Bearer tok-123"
        assert env.method == "GET"

    def test_missing_token_still_sends_bare_scheme(self) -> None:
        env = build_envelope("GET", "/x", None)
        assert env.headers["Authorization"] == "Bearer"

    def test_empty_token_treated_as_missing(self) -> None:
        env = build_envelope("GET", "/x", "")
        assert env.headers["Authorization"] == "Bearer"

    def test_missing_token_omitted_when_disabled(self) -> None:
        env = build_envelope("GET", "/x", None, send_empty_bearer=False)
        assert not any(key.lower() == "authorization" for key in env.headers)

    def test_overrides_caller_authorization(self) -> None:
        env = build_envelope("GET", "/x", "fresh", headers={"authorization": "Bearer stale"})
        assert env.headers["Authorization"] == "Bearer fresh"
        assert "authorization" not in env.headers

    def test_bearer_value(self) -> None:
        assert bearer_value("abc") == "Bearer abc"
        assert bearer_value(None) == "Bearer"


class TestBodyKinds:
    def test_json_body_sets_content_type(self) -> None:
        env = build_envelope("POST", "/x", "t", body=JsonBody({"a": 1}))
        assert env.headers["Content-Type"] == "application/json"
        assert env.is_multipart is False
        assert env.transport_kwargs()["json"] == {"a": 1}

    def test_caller_content_type_kept_for_json(self) -> None:
        env = build_envelope(
            "POST", "/x", "t", body=JsonBody({"a": 1}),
            headers={"content-type": "application/vnd.api+json"},
        )
        assert env.headers["content-type"] == "application/vnd.api+json"
        assert "Content-Type" not in env.headers

    def test_no_body_no_content_type(self) -> None:
        env = build_envelope("GET", "/x", "t")
        assert "Content-Type" not in env.headers
        assert "json" not in env.transport_kwargs()
        assert "files" not in env.transport_kwargs()

    def test_multipart_strips_content_type(self, image_form: MultipartBody) -> None:
        env = build_envelope(
            "POST", "/x", "t", body=image_form,
            headers={"Content-Type": "multipart/form-data"},
        )
        assert env.is_multipart is True
        assert not any(key.lower() == "content-type" for key in env.headers)

    def test_multipart_parts_passed_verbatim(self, image_form: MultipartBody) -> None:
        kwargs = build_envelope("POST", "/x", "t", body=image_form).transport_kwargs()
        assert "json" not in kwargs
        assert kwargs["files"] == [
            ("caption", (None, "me")),
            ("image", ("avatar.png", b"\x89PNG\r\n\x1a\n\x00\x01", "image/png")),
        ]

    def test_empty_multipart_rejected(self) -> None:
        with pytest.raises(InvalidBodyError):
            MultipartBody()

    def test_as_body_wraps_raw_values(self, image_form: MultipartBody) -> None:
        assert as_body(None) is None
        assert as_body({"a": 1}) == JsonBody({"a": 1})
        assert as_body(image_form) is image_form
        json_body = JsonBody([1, 2])
        assert as_body(json_body) is json_body


class TestEnvelopeFields:
    def test_generates_request_id(self) -> None:
        env = build_envelope("GET", "/x", "t")
        uuid.UUID(env.request_id)

    def test_reuses_caller_request_id(self) -> None:
        env = build_envelope("GET", "/x", "t", headers={"x-request-id": "abc"})
        assert env.request_id == "abc"
        assert "x-request-id" not in env.headers

    def test_params_and_timeout_forwarded(self) -> None:
        kwargs = build_envelope(
            "GET", "/x", "t", params={"page": 1}, timeout=5.0
        ).transport_kwargs()
        assert kwargs["params"] == {"page": 1}
        assert kwargs["timeout"] == 5.0

    def test_caller_headers_not_mutated(self) -> None:
        headers = {"X-Trace": "1"}
        env = build_envelope("GET", "/x", "t", headers=headers)
        assert headers == {"X-Trace": "1"}
        assert env.headers["X-Trace"] == "1"

    def test_fresh_envelope_per_call(self) -> None:
        first = build_envelope("GET", "/x", "a")
        second = build_envelope("GET", "/x", "b")
        assert first.headers is not second.headers
        assert first.request_id != second.request_id
