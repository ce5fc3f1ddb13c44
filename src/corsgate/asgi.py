"""CORS as a raw ASGI middleware.

Wraps any ASGI 3 application, so the same policy can sit in front of
apps that don't use the request/next pipeline::

    from corsgate.asgi import CORSASGIMiddleware

    app = CORSASGIMiddleware(app, CORSConfig(allowed_origins=("https://app.example.com",)))

Preflight ``OPTIONS`` requests are answered directly with 200. For all
other requests the CORS headers are appended to the inner app's
``http.response.start`` message.
"""

import logging
from collections.abc import Iterable

from corsgate._internal.asgi import ASGIApp, Message, Receive, Scope, Send, encode_headers
from corsgate.config import CORSConfig
from corsgate.diagnostics import DiagnosticLogger
from corsgate.handler import CORSHandler
from corsgate.http.request import Request
from corsgate.store import OriginPolicy

_log = logging.getLogger("corsgate.asgi")


class CORSASGIMiddleware:
    """ASGI wrapper applying a CORS policy in front of *app*.

    Non-HTTP scopes (``lifespan``, ``websocket``) pass straight through.
    """

    __slots__ = ("app", "handler")

    def __init__(
        self,
        app: ASGIApp,
        config: CORSConfig | None = None,
        *,
        logger: DiagnosticLogger | None = None,
    ) -> None:
        self.app = app
        self.handler = CORSHandler(config, logger=logger)

    def refresh_origins(self, origins: Iterable[str]) -> OriginPolicy:
        """Replace the allowed origins without rebuilding the middleware."""
        return self.handler.refresh_origins(origins)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request.from_asgi(scope)

        if self.handler.is_preflight(request.method):
            decision = self.handler.preflight(request.headers)
            await _send_preflight(send, decision.headers)
            return

        decision = self.handler.actual(request.headers)
        if not decision.headers:
            await self.app(scope, receive, send)
            return

        cors_headers = encode_headers(decision.headers)

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.extend(cors_headers)
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_with_cors)


async def _send_preflight(send: Send, headers: tuple[tuple[str, str], ...]) -> None:
    """Answer a preflight with an empty 200, allowed or not."""
    raw_headers = encode_headers(headers)
    raw_headers.append((b"content-length", b"0"))
    _log.debug("preflight answered with %d CORS headers", len(headers))
    await send(
        {
            "type": "http.response.start",
            "status": 200,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"",
        }
    )
