"""Method and URL patterns.

A pattern is a tagged variant rather than a magic string:

- MethodPattern = ExactMethod | Wildcard
- UrlPattern    = ExactUrl | RegexUrl | Wildcard

``ANY`` is the single Wildcard instance. It is usable as either a method or a
URL pattern and cannot collide with any method token or URL literal.

Regex URL patterns use ``google-re2`` for guaranteed linear-time matching and
are searched against the whole candidate URL string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

import re2

from stubmatch._errors import InvalidPatternError, MatcherError
from stubmatch._url import UrlParts, canonical_path, parse_request_uri, parse_url

# URL pattern strings with this prefix are compiled as regular expressions.
REGEX_PREFIX: Final = "=~"


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches any method or any URL."""

    def __repr__(self) -> str:
        return "ANY"


ANY: Final = Wildcard()


@dataclass(frozen=True, slots=True)
class ExactMethod:
    """A literal HTTP method token, compared case-insensitively."""

    value: str


@dataclass(frozen=True, slots=True)
class ExactUrl:
    """Component-wise URL match.

    Empty scheme or host leaves that component unconstrained, so a path-only
    pattern matches the same path on any scheme and host.
    """

    parts: UrlParts


@dataclass(frozen=True, slots=True)
class RegexUrl:
    """Regular expression searched against the full candidate URL.

    Raises:
        InvalidPatternError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid url regex "{self.pattern}": {e}'
            raise InvalidPatternError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def search(self, url: str) -> bool:
        return self._compiled.search(url) is not None


type MethodPattern = ExactMethod | Wildcard
type UrlPattern = ExactUrl | RegexUrl | Wildcard


def method_pattern(value: str | MethodPattern) -> MethodPattern:
    """Coerce a method string or an existing variant into a MethodPattern."""
    match value:
        case Wildcard() | ExactMethod():
            return value
        case str():
            return ExactMethod(value)
    msg = f"method pattern must be a string or ANY, got {type(value).__name__}"
    raise MatcherError(msg)


def url_pattern(value: str | UrlPattern) -> UrlPattern:
    """Coerce a URL string or an existing variant into a UrlPattern.

    Strings starting with ``=~`` become RegexUrl; any other string is parsed
    eagerly into an ExactUrl.

    Raises:
        MalformedPatternUrlError: If the URL string cannot be parsed.
        InvalidPatternError: If the regex does not compile.
    """
    match value:
        case Wildcard() | ExactUrl() | RegexUrl():
            return value
        case str() if value.startswith(REGEX_PREFIX):
            return RegexUrl(value.removeprefix(REGEX_PREFIX))
        case str():
            return ExactUrl(parse_url(value))
    msg = f"url pattern must be a string or ANY, got {type(value).__name__}"
    raise MatcherError(msg)


def match_method(pattern: MethodPattern, candidate: str) -> bool:
    """Case-insensitive method comparison. ANY matches every method."""
    match pattern:
        case Wildcard():
            return True
        case ExactMethod(value=value):
            return candidate.upper() == value.upper()
    return False  # pragma: no cover


def match_url(pattern: UrlPattern, candidate: str) -> bool:
    """Match a candidate URL against a pattern.

    ANY returns True without parsing the candidate. Otherwise the candidate
    is parsed as a request URI and compared on scheme, host (including port)
    and canonical path.

    Raises:
        MalformedCandidateUrlError: If the candidate is not a valid request URI.
    """
    match pattern:
        case Wildcard():
            return True
        case RegexUrl():
            parse_request_uri(candidate)
            return pattern.search(candidate)
        case ExactUrl(parts=want):
            got = parse_request_uri(candidate)
            if want.scheme and got.scheme != want.scheme:
                return False
            if want.host and got.host != want.host:
                return False
            return canonical_path(got.path) == canonical_path(want.path)
    return False  # pragma: no cover
