"""MockResponse — the canned response a responder returns."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class MockResponse:
    """A substitute HTTP response.

    Raises:
        ValueError: If status is not a valid HTTP status code (100-599).
    """

    status: int = 200
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    _lower_headers: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.status, bool) or not 100 <= self.status <= 599:
            msg = f"invalid HTTP status code: {self.status!r}"
            raise ValueError(msg)
        object.__setattr__(
            self,
            "_lower_headers",
            {k.lower(): v for k, v in self.headers.items()},
        )

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.body)

    def header(self, name: str) -> str | None:
        """Get a header value by name (case-insensitive)."""
        return self._lower_headers.get(name.lower())
