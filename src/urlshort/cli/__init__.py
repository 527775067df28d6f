"""urlshort CLI: serve redirects or inspect the redirect table.

Entry point registered as ``urlshort`` in ``pyproject.toml``::

    [project.scripts]
    urlshort = "urlshort.cli:main"
"""

import argparse
import sys


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every subcommand that assembles the chain."""
    parser.add_argument(
        "--yamlfile",
        default=None,
        help="YAML file with path/url redirect records (skipped when unset)",
    )
    parser.add_argument(
        "--jsonfile",
        default=None,
        help="JSON file with path/url redirect records (skipped when unset)",
    )
    parser.add_argument(
        "--boltfile",
        default="bolt.db",
        help="Key-value store file with redirects (created if absent, default: bolt.db)",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Logging level (default: info)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``urlshort`` command."""
    parser = argparse.ArgumentParser(
        prog="urlshort",
        description="urlshort: redirect request paths to URLs from layered sources.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- urlshort run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the redirect server")
    _add_source_arguments(run_parser)
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- urlshort routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the effective redirects")
    _add_source_arguments(routes_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from urlshort.cli._run import run_command

        run_command(args)
    elif args.command == "routes":
        from urlshort.cli._routes import run_routes

        run_routes(args)
