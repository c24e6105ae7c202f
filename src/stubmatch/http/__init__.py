"""stubmatch.http — HTTP request/response values and responder builders."""

from stubmatch.http._request import MockRequest
from stubmatch.http._responders import (
    bytes_responder,
    error_responder,
    json_responder,
    string_responder,
)
from stubmatch.http._response import MockResponse

__all__ = [
    # Values
    "MockRequest",
    "MockResponse",
    # Responders
    "bytes_responder",
    "string_responder",
    "json_responder",
    "error_responder",
]
