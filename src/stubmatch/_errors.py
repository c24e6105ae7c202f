"""Error types for stubmatch.

Everything the matcher raises derives from MatcherError. Errors raised by a
responder are never wrapped: they reach the caller unchanged.
"""

from __future__ import annotations


class MatcherError(Exception):
    """Base class for matcher errors."""


class MalformedUrlError(MatcherError):
    """A URL string could not be parsed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"malformed url {url!r}: {reason}")


class MalformedPatternUrlError(MalformedUrlError):
    """A registered URL pattern is unparsable (raised at construction)."""


class MalformedCandidateUrlError(MalformedUrlError):
    """The URL being matched is not a valid request URI (raised at match time)."""


class InvalidPatternError(MatcherError):
    """A URL regex pattern is not valid RE2 syntax."""


class NoResponderFoundError(MatcherError):
    """No registered rule matched the request and no fallback is set."""

    def __init__(self, method: str, url: str) -> None:
        self.method = method
        self.url = url
        super().__init__(f"no responder found for {method} {url}")
