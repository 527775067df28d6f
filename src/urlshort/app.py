"""The ASGI application.

Wraps an assembled handler chain. The chain is built before the app
exists, so the app itself has nothing to load or fail at startup::

    handler = await build_chain(config, STATIC_REDIRECTS)
    app = App(handler, config=config)
"""

import logging

from urlshort._internal.asgi import Receive, Scope, Send
from urlshort.config import AppConfig
from urlshort.handlers import Handler
from urlshort.http.request import Request
from urlshort.http.response import Response
from urlshort.server.sender import send_response

logger = logging.getLogger("urlshort.server")


class App:
    """ASGI entry point serving one immutable handler chain."""

    __slots__ = ("config", "handler")

    def __init__(self, handler: Handler, *, config: AppConfig | None = None) -> None:
        self.handler = handler
        self.config = config or AppConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        try:
            response = await self.handler(request)
        except Exception:
            logger.exception("Unhandled error serving %s %s", request.method, request.url)
            response = Response("Internal Server Error\n", status=500)
        await send_response(response, send, head=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan events; there are no hooks to run."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
