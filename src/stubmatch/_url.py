"""URL parsing into the components the matcher compares.

Two entry points with different strictness:

- parse_url() parses registered patterns. Absolute, scheme-relative
  (``//host/path``) and path-only forms are accepted, and the fragment is cut.
- parse_request_uri() parses candidate URLs the way a request line is read:
  an absolute URI or an absolute path. A scheme-less ``//host/path`` is a path,
  not an authority, and ``#`` is not treated as a fragment delimiter.

Paths are percent-decoded before comparison. Bytes that are not valid UTF-8
are kept as surrogates, so distinct escapes never decode to the same path.
Query strings are never compared.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Final
from urllib.parse import SplitResult, unquote, urlsplit

from stubmatch._errors import (
    MalformedCandidateUrlError,
    MalformedPatternUrlError,
    MalformedUrlError,
)

# Non-alphanumeric characters allowed in a host (sub-delims, ":", IPv6
# brackets, "%" for zone escapes and the unreserved marks).
_HOST_PUNCTUATION: Final = frozenset("-._~!$&'()*+,;=:[]%")


@dataclass(frozen=True, slots=True)
class UrlParts:
    """Scheme, host (with port) and decoded path of a URL.

    An empty component is unconstrained when the parts come from a pattern.
    """

    scheme: str = ""
    host: str = ""
    path: str = ""


def canonical_path(path: str) -> str:
    """Return the canonical form of a path.

    ``"/"`` and ``""`` both denote the root, so ``"/"`` maps to ``""``.
    Every other path, including ones with a trailing slash, is unchanged.
    """
    if path == "/":
        return ""
    return path


def parse_url(raw: str) -> UrlParts:
    """Parse a URL pattern.

    Raises:
        MalformedPatternUrlError: If the pattern cannot be parsed.
    """
    _check_control_chars(raw, MalformedPatternUrlError)
    try:
        parts = urlsplit(raw)
    except ValueError as e:
        raise MalformedPatternUrlError(raw, str(e)) from e
    return _to_parts(raw, parts, MalformedPatternUrlError)


def parse_request_uri(raw: str) -> UrlParts:
    """Parse a candidate URL taken from a request.

    Raises:
        MalformedCandidateUrlError: If the URL is not a valid request URI.
    """
    if not raw:
        raise MalformedCandidateUrlError(raw, "empty url")
    _check_control_chars(raw, MalformedCandidateUrlError)

    if raw.startswith("/"):
        path = raw.partition("?")[0]
        _check_escapes(raw, path, MalformedCandidateUrlError)
        return UrlParts(path=_decode(path))

    # urlsplit strips leading whitespace; a request URI starts with a scheme.
    if not (raw[0].isascii() and raw[0].isalpha()):
        raise MalformedCandidateUrlError(raw, "invalid URI for request")
    try:
        parts = urlsplit(raw, allow_fragments=False)
    except ValueError as e:
        raise MalformedCandidateUrlError(raw, str(e)) from e
    if not parts.scheme:
        raise MalformedCandidateUrlError(raw, "invalid URI for request")
    return _to_parts(raw, parts, MalformedCandidateUrlError)


def _to_parts(
    raw: str, parts: SplitResult, error: type[MalformedUrlError]
) -> UrlParts:
    host = parts.netloc.rpartition("@")[2]
    _check_host(raw, host, error)

    path = parts.path
    if parts.scheme and not parts.netloc and path and not path.startswith("/"):
        # Opaque form such as "mailto:someone@example.com" has no path.
        path = ""
    _check_escapes(raw, path, error)

    return UrlParts(scheme=parts.scheme, host=host, path=_decode(path))


def _decode(path: str) -> str:
    return unquote(path, errors="surrogateescape")


def _check_control_chars(raw: str, error: type[MalformedUrlError]) -> None:
    for ch in raw:
        if ord(ch) < 0x20 or ord(ch) == 0x7F:
            msg = f"invalid control character {ch!r} in url"
            raise error(raw, msg)


def _check_host(raw: str, host: str, error: type[MalformedUrlError]) -> None:
    for ch in host:
        if not (ch.isascii() and ch.isalnum()) and ch not in _HOST_PUNCTUATION:
            msg = f"invalid character {ch!r} in host name"
            raise error(raw, msg)

    # The port must be digits; its range is not checked, it is compared as text.
    _, colon, port = host.rpartition("]")[2].rpartition(":")
    if colon and port and not port.isdigit():
        msg = f"invalid port {':' + port!r} after host"
        raise error(raw, msg)


def _check_escapes(raw: str, path: str, error: type[MalformedUrlError]) -> None:
    i = path.find("%")
    while i != -1:
        escape = path[i + 1 : i + 3]
        if len(escape) != 2 or not all(c in string.hexdigits for c in escape):
            msg = f"invalid escape {path[i : i + 3]!r}"
            raise error(raw, msg)
        i = path.find("%", i + 3)
