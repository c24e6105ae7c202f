"""Responder builders for common canned responses.

Each builder returns a responder that ignores the request and produces an
equal MockResponse every time. Bodies are encoded once, when the responder is
built, so an unserializable JSON payload fails during test setup.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from stubmatch.http._response import MockResponse

if TYPE_CHECKING:
    from stubmatch._types import Responder
    from stubmatch.http._request import MockRequest

JSON_CONTENT_TYPE = "application/json"


def bytes_responder(
    status: int, body: bytes, headers: dict[str, str] | None = None
) -> Responder[MockRequest, MockResponse]:
    # Validates status now; each call gets its own headers dict.
    template = MockResponse(status=status, body=body, headers=dict(headers or {}))

    def responder(_request: MockRequest, /) -> MockResponse:
        return MockResponse(
            status=template.status, body=template.body, headers=dict(template.headers)
        )

    return responder


def string_responder(
    status: int, body: str, headers: dict[str, str] | None = None
) -> Responder[MockRequest, MockResponse]:
    """Respond with a UTF-8 encoded string body."""
    return bytes_responder(status, body.encode("utf-8"), headers)


def json_responder(
    status: int, payload: Any, headers: dict[str, str] | None = None
) -> Responder[MockRequest, MockResponse]:
    """Respond with a JSON-encoded payload.

    Content-Type defaults to application/json; an explicit header wins.

    Raises:
        TypeError: If the payload is not JSON serializable.
    """
    merged = {"Content-Type": JSON_CONTENT_TYPE}
    for name, value in (headers or {}).items():
        if name.lower() == "content-type":
            merged.pop("Content-Type", None)
        merged[name] = value
    return bytes_responder(status, json.dumps(payload).encode("utf-8"), merged)


def error_responder(exc: BaseException) -> Responder[MockRequest, MockResponse]:
    """Raise ``exc`` on every call, simulating a transport failure."""

    def responder(_request: MockRequest, /) -> MockResponse:
        raise exc

    return responder
