"""Serve an App with uvicorn.

The app object is live (its chain is already built), so uvicorn gets
the instance rather than an import string, and reload is off.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from urlshort.app import App


def run_server(app: App, host: str, port: int, *, log_level: str = "info") -> None:
    """Start a single-worker uvicorn server for *app* and block until it exits."""
    import uvicorn

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level,
        lifespan="on",
        reload=False,
    )
