"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention.
"""

import html
from dataclasses import dataclass, replace
from http import HTTPStatus
from urllib.parse import quote


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_content_type(self, content_type: str) -> "Response":
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        key = name.lower()
        for header_name, value in self.headers:
            if header_name.lower() == key:
                return value
        return default

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect to *url*. 302 Found unless told otherwise."""

    url: str
    status: int = 302

    def to_response(self) -> Response:
        """Render as a Response with a ``Location`` header and a link body.

        Browsers follow the header; the body is for clients that don't.
        """
        reason = HTTPStatus(self.status).phrase
        body = f'<a href="{html.escape(self.url)}">{reason}</a>.\n'
        return Response(
            body=body,
            status=self.status,
            content_type="text/html; charset=utf-8",
            headers=(("Location", _escape_for_header(self.url)),),
        )


def _escape_for_header(url: str) -> str:
    """Percent-encode non-ASCII and control characters so the URL fits in a header."""
    return "".join(quote(ch) if _needs_escape(ch) else ch for ch in url)


def _needs_escape(ch: str) -> bool:
    return not ch.isascii() or ord(ch) < 0x20 or ch == "\x7f"
