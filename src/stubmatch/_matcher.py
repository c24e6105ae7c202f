"""Matcher — one (method pattern, URL pattern, responder) rule.

A Matcher is immutable after construction. Matching is a pure computation,
so concurrent evaluation against the same Matcher needs no locking; the
responder must be safe to call concurrently on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stubmatch._errors import MatcherError
from stubmatch._patterns import (
    ExactMethod,
    ExactUrl,
    RegexUrl,
    Wildcard,
    match_method,
    match_url,
    method_pattern,
    url_pattern,
)
from stubmatch._types import Responder

if TYPE_CHECKING:
    from stubmatch._patterns import MethodPattern, UrlPattern


@dataclass(frozen=True, slots=True)
class Matcher[Req, Resp]:
    """A single mocking rule.

    Construct with new_matcher() to get string coercion and eager URL
    parsing; the dataclass constructor takes already-built patterns.

    INV: match() never returns True for a candidate it failed to parse.
    """

    method: MethodPattern
    url: UrlPattern
    responder: Responder[Req, Resp]

    def __post_init__(self) -> None:
        if not isinstance(self.method, Wildcard | ExactMethod):
            msg = f"method must be a MethodPattern, got {type(self.method).__name__}"
            raise MatcherError(msg)
        if not isinstance(self.url, Wildcard | ExactUrl | RegexUrl):
            msg = f"url must be a UrlPattern, got {type(self.url).__name__}"
            raise MatcherError(msg)
        if not isinstance(self.responder, Responder):
            msg = f"responder must be callable, got {type(self.responder).__name__}"
            raise MatcherError(msg)

    def match_method(self, method: str) -> bool:
        return match_method(self.method, method)

    def match_url(self, url: str) -> bool:
        """See stubmatch._patterns.match_url."""
        return match_url(self.url, url)

    def match(self, method: str, url: str) -> bool:
        """Match a candidate request line against this rule.

        Short-circuits on the method: the URL is not parsed when the method
        does not match.

        Raises:
            MalformedCandidateUrlError: If the method matched and the URL is
                not a valid request URI.
        """
        if not self.match_method(method):
            return False
        return self.match_url(url)

    def respond(self, request: Req) -> Resp:
        """Invoke the responder with the real request. Errors pass through."""
        return self.responder(request)


def new_matcher[Req, Resp](
    method: str | MethodPattern,
    url: str | UrlPattern,
    responder: Responder[Req, Resp],
) -> Matcher[Req, Resp]:
    """Build a Matcher from pattern strings (or ANY).

    The URL pattern is parsed here, so a malformed pattern fails at setup
    rather than when the first request arrives.

    Raises:
        MalformedPatternUrlError: If the URL pattern cannot be parsed.
        InvalidPatternError: If a ``=~`` regex pattern does not compile.
        MatcherError: If a pattern has the wrong type or the responder is
            not callable.
    """
    return Matcher(
        method=method_pattern(method),
        url=url_pattern(url),
        responder=responder,
    )
