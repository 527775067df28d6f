"""Tests for urlshort.server.sender response emission rules."""

from typing import Any

import pytest

from urlshort.http.response import Response
from urlshort.server.sender import send_response


async def _collect(response: Response, **kwargs: Any) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send, **kwargs)
    return messages


class TestSendResponse:
    @pytest.mark.asyncio
    async def test_start_then_body(self) -> None:
        messages = await _collect(Response("hi").with_header("X-Test", "1"))
        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"
        assert headers[b"x-test"] == b"1"
        assert headers[b"content-length"] == b"2"
        assert messages[1] == {"type": "http.response.body", "body": b"hi"}

    @pytest.mark.asyncio
    async def test_204_drops_body(self) -> None:
        messages = await _collect(Response("unexpected").with_status(204))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    @pytest.mark.asyncio
    async def test_head_keeps_length_drops_body(self) -> None:
        messages = await _collect(Response("hello"), head=True)
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"5"
        assert messages[1]["body"] == b""
