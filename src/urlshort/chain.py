"""Chain assembly.

Wires the lookup handlers so each one's fallback is the next source in
priority order, highest first::

    static map -> key-value store -> YAML file -> JSON file -> DefaultRouter

A path present in several sources is answered by whichever comes first;
there is no merging. Assembly is sequential and completes before the
server accepts a connection.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from urlshort.config import AppConfig
from urlshort.errors import SourceError
from urlshort.handlers import (
    DefaultRouter,
    Handler,
    LookupHandler,
    json_handler,
    map_handler,
    store_handler,
    yaml_handler,
)

logger = logging.getLogger("urlshort.chain")


async def build_chain(
    config: AppConfig,
    static_map: Mapping[str, str],
    *,
    fallback: Handler | None = None,
) -> Handler:
    """Build the full handler chain described by *config*.

    Sources whose path is unset in *config* are left out. *fallback*
    replaces the terminal ``DefaultRouter`` when given.

    Raises:
        SourceError: A configured file cannot be read.
        ParseError: A YAML or JSON file is malformed.
        StoreError: The key-value store cannot be opened or read.
    """
    handler: Handler = fallback if fallback is not None else DefaultRouter(config.greeting)

    # Built lowest priority first: each new handler wraps the previous one
    if config.json_file:
        handler = json_handler(read_source(config.json_file), handler, name=config.json_file)
    if config.yaml_file:
        handler = yaml_handler(read_source(config.yaml_file), handler, name=config.yaml_file)
    if config.store_file:
        handler = await store_handler(
            config.store_file,
            handler,
            bucket=config.store_bucket,
            timeout=config.store_timeout,
        )
    handler = map_handler(static_map, handler)

    for link in iter_chain(handler):
        logger.info("Loaded %d redirect(s) from %s", len(link.redirects), link.source)
    return handler


def read_source(path: str) -> bytes:
    """Read a redirect file, turning I/O failures into ``SourceError``."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise SourceError(path, exc.strerror or str(exc)) from exc


def iter_chain(handler: Handler) -> Iterator[LookupHandler]:
    """Yield the lookup handlers of a chain, highest priority first."""
    current = handler
    while isinstance(current, LookupHandler):
        yield current
        current = current.fallback


@dataclass(frozen=True, slots=True)
class ChainEntry:
    """One redirect as seen from the front of the chain."""

    source: str
    path: str
    url: str
    shadowed: bool  # A higher-priority source answers this path first


def describe_chain(handler: Handler) -> list[ChainEntry]:
    """List every redirect in the chain, flagging entries that never win."""
    seen: set[str] = set()
    entries: list[ChainEntry] = []
    for link in iter_chain(handler):
        for path in sorted(link.redirects):
            entries.append(ChainEntry(link.source, path, link.redirects[path], path in seen))
        seen.update(link.redirects)
    return entries
