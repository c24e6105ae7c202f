"""RuleSet — ordered collection of Matchers with first-match-wins dispatch.

Rules are consulted in registration order and the first one whose method and
URL both match produces the response. When nothing matches, the optional
fallback responder answers instead (the rule-set analogue of on_no_match).

Registration is not thread-safe. Dispatch against a rule set that is no
longer being mutated is.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stubmatch._errors import NoResponderFoundError
from stubmatch._matcher import Matcher, new_matcher

if TYPE_CHECKING:
    from stubmatch._patterns import MethodPattern, UrlPattern
    from stubmatch._types import RequestLike, Responder

logger = logging.getLogger("stubmatch.rules")


class RuleSet[Req: RequestLike, Resp]:
    """Ordered mocking rules plus an optional fallback responder."""

    def __init__(self) -> None:
        self._rules: list[Matcher[Req, Resp]] = []
        self._fallback: Responder[Req, Resp] | None = None

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def rules(self) -> tuple[Matcher[Req, Resp], ...]:
        """Snapshot of registered rules in evaluation order."""
        return tuple(self._rules)

    @property
    def fallback(self) -> Responder[Req, Resp] | None:
        return self._fallback

    def register(
        self,
        method: str | MethodPattern,
        url: str | UrlPattern,
        responder: Responder[Req, Resp],
    ) -> Matcher[Req, Resp]:
        """Build a Matcher via new_matcher() and append it.

        Raises:
            MalformedPatternUrlError: If the URL pattern cannot be parsed.
        """
        matcher = new_matcher(method, url, responder)
        self.add(matcher)
        return matcher

    def add(self, matcher: Matcher[Req, Resp]) -> RuleSet[Req, Resp]:
        """Append an already-built Matcher."""
        self._rules.append(matcher)
        logger.debug("registered rule #%d: %r %r", len(self._rules), matcher.method, matcher.url)
        return self

    def set_fallback(self, responder: Responder[Req, Resp] | None) -> RuleSet[Req, Resp]:
        """Set (or clear, with None) the responder used when no rule matches."""
        self._fallback = responder
        return self

    def reset(self) -> None:
        """Drop every rule and the fallback."""
        self._rules.clear()
        self._fallback = None

    def find(self, method: str, url: str) -> Matcher[Req, Resp] | None:
        """Return the first rule matching (method, url), or None.

        Raises:
            MalformedCandidateUrlError: If a rule whose method matched had to
                parse the URL and it is not a valid request URI.
        """
        for matcher in self._rules:
            if matcher.match(method, url):
                return matcher
        return None

    def dispatch(self, request: Req) -> Resp:
        """Respond to a request with the first matching rule or the fallback.

        Raises:
            NoResponderFoundError: If nothing matched and no fallback is set.
            MalformedCandidateUrlError: If the request URL is malformed.
        """
        matcher = self.find(request.method, request.url)
        if matcher is not None:
            logger.debug("matched %s %s", request.method, request.url)
            return matcher.respond(request)

        if self._fallback is not None:
            logger.debug("no rule for %s %s, using fallback", request.method, request.url)
            return self._fallback(request)

        logger.debug("no rule for %s %s", request.method, request.url)
        raise NoResponderFoundError(request.method, request.url)
