"""HTTP server adapter for OG image routes.

Provides a simple async HTTP server using Python's built-in http.server module
and asyncio for handling image requests.

Routes:
- GET /og/{slug}: card for the post with this slug
- GET /og/title/{title}: card for a literal, URL-encoded title
- GET /health: liveness check
"""

import asyncio
import json
import logging
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Coroutine
from urllib.parse import unquote, urlsplit

from siteog.core.models import OgResponse
from siteog.core.ports import ImageResponderPort

logger = logging.getLogger(__name__)

OG_PREFIX = "/og/"
OG_TITLE_PREFIX = "/og/title/"


def match_og_route(path: str) -> tuple[str, str] | None:
    """Map a request path to an OG route family and its path variable.

    Returns:
        ("slug", slug) or ("title", title) with the segment URL-decoded,
        or None if the path is not an OG route.
    """
    if path.startswith(OG_TITLE_PREFIX):
        family, segment = "title", path[len(OG_TITLE_PREFIX):]
    elif path.startswith(OG_PREFIX):
        family, segment = "slug", path[len(OG_PREFIX):]
    else:
        return None

    # One path variable per route
    if "/" in segment:
        return None
    return family, unquote(segment)


def make_og_handler(
    responder: ImageResponderPort,
    event_loop: asyncio.AbstractEventLoop,
    request_timeout: float = 30.0,
) -> type[BaseHTTPRequestHandler]:
    """Factory to create an OGHTTPHandler class with instance-specific state.

    Creates a handler class with closure-captured dependencies instead of
    using class-level mutable state.

    Args:
        responder: ImageResponderPort that renders the images.
        event_loop: Event loop the responder coroutines run on.
        request_timeout: Seconds to wait for one image before giving up.

    Returns:
        An OGHTTPHandler class configured with the provided dependencies
    """

    class OGHTTPHandler(BaseHTTPRequestHandler):
        """HTTP request handler for OG image endpoints."""

        def do_GET(self) -> None:
            """Handle GET requests.

            Routes to the responder based on path.
            """
            path = urlsplit(self.path).path

            if path == "/health":
                self._send_json({"status": "healthy"})
                return

            route = match_og_route(path)
            if route is None:
                self.send_error(404, "Not found")
                return

            family, identifier = route
            logger.debug(f"OG request ({family}): {identifier!r}")
            if family == "title":
                result = self._run_async(responder.render_for_title(identifier))
            else:
                result = self._run_async(responder.render_for_slug(identifier))

            self._send_og_response(result)

        def _run_async(self, coro: Coroutine[Any, Any, OgResponse]) -> OgResponse:
            """Run a responder coroutine on the event loop and wait for it.

            Returns:
                The response, or the fixed failure response if the coroutine
                raised or did not finish within the request timeout.
            """
            future = asyncio.run_coroutine_threadsafe(coro, event_loop)
            try:
                return future.result(timeout=request_timeout)
            except Exception as e:
                future.cancel()
                # Log full exception server-side for debugging
                logger.error(f"Error handling OG request: {e}", exc_info=True)
                # Same body as any other rendering failure, without details
                return OgResponse.failure()

        def _send_og_response(self, response: OgResponse) -> None:
            """Write an OgResponse to the client."""
            self.send_response(response.status)
            self.send_header("Content-Type", response.content_type)
            self.send_header("Content-Length", str(len(response.body)))
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.end_headers()
            self.wfile.write(response.body)

        def _send_json(self, data: dict[str, Any]) -> None:
            """Send JSON response."""
            body = json.dumps(data).encode()
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format: str, *args: Any) -> None:
            """Log HTTP request."""
            logger.debug(f"HTTP {self.client_address[0]}: {format % args}")

    return OGHTTPHandler


class OGHTTPServer:
    """OG image HTTP server adapter.

    Serves the OG image routes from a blocking HTTPServer running in a
    worker thread, dispatching each request to the responder on the
    event loop that started the server.
    """

    def __init__(
        self,
        responder: ImageResponderPort,
        host: str = "0.0.0.0",
        port: int = 4321,
        request_timeout: float = 30.0,
    ):
        """Initialize the HTTP server.

        Args:
            responder: ImageResponderPort instance to handle requests.
            host: Host to listen on (default 0.0.0.0).
            port: Port to listen on (default 4321). 0 picks a free port.
            request_timeout: Seconds to wait for one image to render.
        """
        self.responder = responder
        self.host = host
        self.port = port
        self.request_timeout = request_timeout
        self.server: HTTPServer | None = None
        self._server_task: asyncio.Task[None] | None = None

    @property
    def server_address(self) -> tuple[str, int]:
        """Address the server is bound to, once started."""
        if self.server is None:
            return self.host, self.port
        host, port = self.server.server_address[:2]
        return str(host), int(port)

    async def start(self) -> None:
        """Start the HTTP server."""
        logger.info(f"Starting OG HTTP server on {self.host}:{self.port}")

        handler_class = make_og_handler(
            responder=self.responder,
            event_loop=asyncio.get_running_loop(),
            request_timeout=self.request_timeout,
        )

        self.server = HTTPServer((self.host, self.port), handler_class)

        # Run server in a separate thread to avoid blocking
        self._server_task = asyncio.create_task(self._run_server())
        logger.info(f"OG HTTP server started on {self.server_address[0]}:{self.server_address[1]}")

    async def _run_server(self) -> None:
        """Run the HTTP server loop in a thread pool."""
        if not self.server:
            return

        try:
            await asyncio.to_thread(self.server.serve_forever)
        except asyncio.CancelledError:
            # Normal shutdown
            pass
        except Exception as e:
            logger.error(f"OG HTTP server error: {e}", exc_info=True)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server:
            await asyncio.to_thread(self.server.shutdown)
            self.server.server_close()
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
        logger.info("OG HTTP server stopped")
