"""Core protocols for stubmatch.

- Responder is the capability a rule invokes after a positive match
- RequestLike is the minimal request shape RuleSet.dispatch reads

The matcher itself never looks inside requests or responses; they are
passed straight through to the responder and back.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

Req = TypeVar("Req", contravariant=True)
Resp = TypeVar("Resp", covariant=True)


@runtime_checkable
class Responder(Protocol[Req, Resp]):
    """Produce a substitute response for a matched request.

    A responder signals failure by raising. Whatever it raises reaches the
    caller of Matcher.respond() unchanged.
    """

    def __call__(self, request: Req, /) -> Resp: ...


@runtime_checkable
class RequestLike(Protocol):
    """Anything with a method and a URL string."""

    @property
    def method(self) -> str: ...

    @property
    def url(self) -> str: ...
