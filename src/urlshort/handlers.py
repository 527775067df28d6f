"""Redirect handlers.

A handler is any async callable ``(Request) -> Response``. Lookup
handlers answer from their own mapping and hand everything else to
their fallback::

    router = DefaultRouter()
    handler = map_handler({"/docs": "https://example.com/docs"}, router)
    response = await handler(request)

There is one lookup type; the per-source constructors below differ only
in how they produce its mapping.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TypeAlias

from urlshort.config import GREETING
from urlshort.http.request import Request
from urlshort.http.response import Redirect, Response
from urlshort.mapping import RedirectMap, freeze_map, parse_json, parse_yaml
from urlshort.store import DEFAULT_BUCKET, DEFAULT_TIMEOUT, load_store

logger = logging.getLogger("urlshort.handlers")

# Anything that can answer a request
Handler: TypeAlias = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True, slots=True)
class DefaultRouter:
    """Terminal handler: greets every path with 200."""

    greeting: str = GREETING

    async def __call__(self, request: Request) -> Response:
        return Response(self.greeting)


@dataclass(frozen=True, slots=True)
class LookupHandler:
    """Redirect paths found in *redirects*; delegate the rest to *fallback*."""

    redirects: RedirectMap
    fallback: Handler
    source: str = "map"

    async def __call__(self, request: Request) -> Response:
        url = self.redirects.get(request.path)
        if url is None:
            return await self.fallback(request)
        logger.debug("%s -> %s (%s)", request.path, url, self.source)
        return Redirect(url).to_response()


def map_handler(paths_to_urls: Mapping[str, str], fallback: Handler) -> LookupHandler:
    """Handler backed by a literal ``path -> url`` dict (copied, then frozen)."""
    return LookupHandler(freeze_map(paths_to_urls), fallback, source="map")


def yaml_handler(data: bytes | str, fallback: Handler, *, name: str = "yaml") -> LookupHandler:
    """Handler backed by a YAML list of ``path``/``url`` records.

    Raises:
        ParseError: *data* is not valid YAML or not a list of records.
    """
    return LookupHandler(parse_yaml(data, source=name), fallback, source="yaml")


def json_handler(data: bytes | str, fallback: Handler, *, name: str = "json") -> LookupHandler:
    """Handler backed by a JSON array of ``path``/``url`` records.

    Raises:
        ParseError: *data* is not valid JSON or not a list of records.
    """
    return LookupHandler(parse_json(data, source=name), fallback, source="json")


async def store_handler(
    path: str,
    fallback: Handler,
    *,
    bucket: str = DEFAULT_BUCKET,
    timeout: float = DEFAULT_TIMEOUT,
) -> LookupHandler:
    """Handler backed by a snapshot of the key-value store at *path*.

    Raises:
        StoreError: The store cannot be opened, locked, or read.
    """
    redirects = await load_store(path, bucket=bucket, timeout=timeout)
    return LookupHandler(redirects, fallback, source="store")
