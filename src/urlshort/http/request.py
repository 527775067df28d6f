"""Immutable HTTP request.

Redirect lookups only need the method and path; headers and the query
string are kept so fallbacks and logs can see the full request.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request, frozen at creation."""

    method: str
    path: str
    query_string: bytes = b""
    headers: tuple[tuple[bytes, bytes], ...] = ()
    client: tuple[str, int] | None = None

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        key = name.lower().encode("latin-1")
        for raw_name, raw_value in self.headers:
            if raw_name.lower() == key:
                return raw_value.decode("latin-1")
        return default

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string.decode('latin-1')}"
        return self.path

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> "Request":
        """Create a Request from an ASGI HTTP scope."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b""),
            headers=tuple(scope.get("headers", ())),
            client=tuple(client) if client else None,
        )
