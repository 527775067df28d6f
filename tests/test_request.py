"""Tests for urlshort.http.request — frozen Request built from an ASGI scope."""

import dataclasses

import pytest

from urlshort.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8080),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope(method="HEAD", path="/urlshort-godoc"))

        assert req.method == "HEAD"
        assert req.path == "/urlshort-godoc"
        assert req.query_string == b""
        assert req.client == ("127.0.0.1", 54321)

    def test_client_list_becomes_tuple(self) -> None:
        req = Request.from_asgi(_make_scope(client=["10.0.0.1", 80]))
        assert req.client == ("10.0.0.1", 80)

    def test_missing_client(self) -> None:
        scope = _make_scope()
        del scope["client"]
        assert Request.from_asgi(scope).client is None

    def test_none_client(self) -> None:
        assert Request.from_asgi(_make_scope(client=None)).client is None

    def test_headers_kept_raw(self) -> None:
        scope = _make_scope(headers=[(b"host", b"short.example"), (b"accept", b"*/*")])
        req = Request.from_asgi(scope)

        assert req.headers == ((b"host", b"short.example"), (b"accept", b"*/*"))

    def test_optional_keys_default(self) -> None:
        scope = _make_scope()
        del scope["query_string"]
        del scope["headers"]
        req = Request.from_asgi(scope)

        assert req.query_string == b""
        assert req.headers == ()


class TestRequestHeader:
    def test_lookup_is_case_insensitive(self) -> None:
        req = Request(method="GET", path="/", headers=((b"user-agent", b"curl/8.0"),))

        assert req.header("User-Agent") == "curl/8.0"
        assert req.header("USER-AGENT") == "curl/8.0"

    def test_first_value_wins(self) -> None:
        req = Request(
            method="GET",
            path="/",
            headers=((b"accept", b"text/html"), (b"accept", b"*/*")),
        )
        assert req.header("accept") == "text/html"

    def test_missing_header_default(self) -> None:
        req = Request(method="GET", path="/")

        assert req.header("x-missing") is None
        assert req.header("x-missing", "fallback") == "fallback"

    def test_latin1_value(self) -> None:
        req = Request(method="GET", path="/", headers=((b"x-name", "café".encode("latin-1")),))
        assert req.header("x-name") == "café"


class TestRequestUrl:
    def test_path_only(self) -> None:
        assert Request(method="GET", path="/docs").url == "/docs"

    def test_with_query_string(self) -> None:
        req = Request.from_asgi(_make_scope(path="/docs", query_string=b"a=1&b=2"))
        assert req.url == "/docs?a=1&b=2"


class TestRequestFrozen:
    def test_cannot_mutate(self) -> None:
        req = Request(method="GET", path="/")
        with pytest.raises(dataclasses.FrozenInstanceError):
            req.path = "/other"  # type: ignore[misc]
