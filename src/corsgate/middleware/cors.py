"""CORS middleware for request/next pipelines.

Preflight ``OPTIONS`` requests are answered here with an empty 200
response; the inner handler never sees them. Every other request goes
through to the inner handler and comes back annotated when its origin
is allowed.
"""

from collections.abc import Iterable

from corsgate.config import CORSConfig
from corsgate.diagnostics import DiagnosticLogger
from corsgate.handler import CORSHandler
from corsgate.http.request import Request
from corsgate.http.response import Response
from corsgate.middleware.protocol import Next
from corsgate.store import OriginPolicy


class CORSMiddleware:
    """CORS policy enforcement as request/next middleware.

    Handles:
    - Preflight ``OPTIONS`` requests (always 200, headers only when allowed)
    - Actual requests (inner handler always runs, headers added when allowed)
    - Runtime origin refresh via ``refresh_origins()``

    Usage::

        cors = CORSMiddleware(CORSConfig(
            allowed_origins=("https://app.example.com", "https://*.example.com"),
            allowed_methods=("GET", "POST", "PUT"),
            allowed_headers=("Content-Type", "Authorization"),
        ))
        response = await cors(request, handler)
    """

    __slots__ = ("handler",)

    def __init__(
        self,
        config: CORSConfig | None = None,
        *,
        logger: DiagnosticLogger | None = None,
    ) -> None:
        self.handler = CORSHandler(config, logger=logger)

    def refresh_origins(self, origins: Iterable[str]) -> OriginPolicy:
        """Replace the allowed origins without rebuilding the middleware."""
        return self.handler.refresh_origins(origins)

    async def __call__(self, request: Request, next: Next) -> Response:
        """Process the request with CORS handling."""
        if self.handler.is_preflight(request.method):
            decision = self.handler.preflight(request.headers)
            return Response(body="", status=200).with_headers(decision.headers)

        decision = self.handler.actual(request.headers)
        response = await next(request)
        if decision.headers:
            response = response.with_headers(decision.headers)
        return response
