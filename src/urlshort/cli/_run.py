"""``urlshort run``: build the chain, then serve it."""

import argparse
import logging
from typing import Any

from urlshort.app import App
from urlshort.cli._load import load_chain

logger = logging.getLogger("urlshort.server")


def run_command(args: argparse.Namespace) -> None:
    """Start the redirect server.

    The chain is fully built before the server binds; ``--host`` and
    ``--port`` override the config defaults.
    """
    overrides: dict[str, Any] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port

    config, handler = load_chain(args, **overrides)
    app = App(handler, config=config)

    from urlshort.server.run import run_server

    logger.info("Starting the server on %s:%d", config.host, config.port)
    run_server(app, config.host, config.port, log_level=config.log_level)
