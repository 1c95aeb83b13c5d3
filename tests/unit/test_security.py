"""Unit tests for security headers, redaction and client addressing."""

from __future__ import annotations

import pytest
from starlette.requests import Request
from starlette.responses import JSONResponse

from linguaflow.core.security import (
    AUTH_ERROR_MESSAGE,
    SECURITY_HEADERS,
    apply_security_headers,
    client_address,
    redact_error_message,
)


def _request(headers: dict[str, str] | None = None, client: tuple[str, int] | None = ("10.0.0.1", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/translate",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
        "query_string": b"",
    }
    return Request(scope)


def test_apply_security_headers() -> None:
    response = apply_security_headers(JSONResponse({"error": "x"}, status_code=400))
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.parametrize(
    "raw",
    [
        "Incorrect API key provided",
        "Authentication failed for request",
        "Missing api_key parameter",
        "401 Unauthorized",
    ],
)
def test_credential_errors_redacted(raw: str) -> None:
    assert redact_error_message(raw, "Translation failed.") == AUTH_ERROR_MESSAGE


def test_other_errors_use_fallback() -> None:
    assert redact_error_message("Rate limit reached for gpt-4o-mini", "Failed.") == "Failed."


class TestClientAddress:
    def test_peer_address(self) -> None:
        assert client_address(_request()) == "10.0.0.1"

    def test_forwarded_ignored_by_default(self) -> None:
        request = _request({"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})
        assert client_address(request) == "10.0.0.1"

    def test_forwarded_first_hop_when_trusted(self) -> None:
        request = _request({"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})
        assert client_address(request, trust_forwarded_for=True) == "203.0.113.9"

    def test_no_client(self) -> None:
        assert client_address(_request(client=None)) == "unknown"
