"""Chain loading shared by ``urlshort run`` and ``urlshort routes``.

Turns parsed flags into an ``AppConfig`` and a built chain. Any startup
failure is reported on stderr and ends the process with status 1; the
server never starts with a partial chain.
"""

import argparse
import logging
import sys
from typing import Any

import anyio

from urlshort.chain import build_chain
from urlshort.config import AppConfig
from urlshort.errors import UrlshortError
from urlshort.handlers import Handler

# Built-in redirects, highest priority of all sources
STATIC_REDIRECTS: dict[str, str] = {
    "/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort",
    "/yaml-godoc": "https://godoc.org/gopkg.in/yaml.v2",
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def config_from_args(args: argparse.Namespace, **overrides: Any) -> AppConfig:
    """Build an ``AppConfig`` from the shared source flags."""
    return AppConfig(
        yaml_file=args.yamlfile or None,
        json_file=args.jsonfile or None,
        store_file=args.boltfile or None,
        log_level=args.log_level,
        **overrides,
    )


def load_chain(args: argparse.Namespace, **overrides: Any) -> tuple[AppConfig, Handler]:
    """Configure logging, then build the config and chain or exit with status 1."""
    configure_logging(args.log_level)
    try:
        config = config_from_args(args, **overrides)
        handler = anyio.run(build_chain, config, STATIC_REDIRECTS)
    except UrlshortError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return config, handler
