"""MockRequest — the request value handed to responders."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class MockRequest:
    """An intercepted outbound request.

    Headers are stored with lowercased keys for case-insensitive lookup.
    The URL is kept verbatim; it is parsed only when a rule matches on it.
    """

    method: str = "GET"
    url: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    _lower_headers: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_lower_headers",
            {k.lower(): v for k, v in self.headers.items()},
        )

    def header(self, name: str) -> str | None:
        """Get a header value by name (case-insensitive)."""
        return self._lower_headers.get(name.lower())
