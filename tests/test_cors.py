"""Tests for the CORS adapters — request/next middleware and ASGI wrapper."""

from typing import Any

from corsgate.asgi import CORSASGIMiddleware
from corsgate.config import CORSConfig, default_config
from corsgate.http.request import Request
from corsgate.http.response import Response
from corsgate.middleware import CORSMiddleware, chain
from corsgate.testing import TestClient

CORS_HEADERS = (
    "access-control-allow-origin",
    "access-control-allow-methods",
    "access-control-allow-headers",
    "access-control-allow-credentials",
    "access-control-max-age",
    "access-control-expose-headers",
)


def _app_policy(**overrides) -> CORSConfig:
    values = {
        "allowed_origins": ("https://app.example.com",),
        "allowed_methods": ("GET", "POST"),
        "allowed_headers": ("Content-Type",),
    }
    values.update(overrides)
    return CORSConfig(**values)


def _no_cors_headers(response: Response) -> bool:
    return not any(response.has_header(name) for name in CORS_HEADERS)


class Inner:
    """Request/next inner handler that records calls."""

    def __init__(self) -> None:
        self.calls: list[Request] = []

    async def __call__(self, request: Request) -> Response:
        self.calls.append(request)
        return Response(body="hello", status=201).with_header("X-Inner", "yes")


class InnerASGI:
    """Minimal ASGI app that records calls."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, scope, receive, send) -> None:
        self.calls.append(scope)
        await send(
            {
                "type": "http.response.start",
                "status": 201,
                "headers": [(b"content-type", b"text/plain"), (b"x-inner", b"yes")],
            }
        )
        await send({"type": "http.response.body", "body": b"hello"})


# -- Request/next middleware ------------------------------------------------


class TestMiddlewarePreflight:
    async def test_allowed_preflight(self) -> None:
        inner = Inner()
        cors = CORSMiddleware(_app_policy())
        request = Request.build(
            "OPTIONS",
            "/api/data",
            {
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        response = await cors(request, inner)
        assert response.status == 200
        assert response.header("access-control-allow-origin") == "https://app.example.com"
        assert response.header("access-control-allow-methods") == "POST"
        assert response.header("access-control-allow-headers") == "Content-Type"
        assert inner.calls == []

    async def test_denied_preflight_is_200_without_headers(self) -> None:
        inner = Inner()
        cors = CORSMiddleware(_app_policy())
        request = Request.build(
            "OPTIONS",
            "/api/data",
            {"Origin": "https://evil.com", "Access-Control-Request-Method": "POST"},
        )
        response = await cors(request, inner)
        assert response.status == 200
        assert _no_cors_headers(response)
        assert inner.calls == []

    async def test_bare_options_is_200(self) -> None:
        inner = Inner()
        response = await CORSMiddleware(_app_policy())(Request.build("OPTIONS"), inner)
        assert response.status == 200
        assert _no_cors_headers(response)
        assert inner.calls == []


class TestMiddlewareActual:
    async def test_allowed_get(self) -> None:
        inner = Inner()
        cors = CORSMiddleware(_app_policy())
        request = Request.build("GET", "/api/data", {"Origin": "https://app.example.com"})
        response = await cors(request, inner)
        assert response.status == 201
        assert response.header("access-control-allow-origin") == "https://app.example.com"
        assert response.header("x-inner") == "yes"
        assert len(inner.calls) == 1

    async def test_no_origin_passes_through(self) -> None:
        inner = Inner()
        response = await CORSMiddleware(_app_policy())(Request.build("GET", "/api/data"), inner)
        assert response.status == 201
        assert _no_cors_headers(response)
        assert len(inner.calls) == 1

    async def test_disallowed_origin_still_reaches_handler(self) -> None:
        inner = Inner()
        request = Request.build("POST", "/api/data", {"Origin": "https://evil.com"})
        response = await CORSMiddleware(_app_policy())(request, inner)
        assert response.status == 201
        assert _no_cors_headers(response)
        assert len(inner.calls) == 1

    async def test_refresh_origins(self) -> None:
        inner = Inner()
        cors = CORSMiddleware(_app_policy())
        cors.refresh_origins(["https://*.partner.io"])
        request = Request.build("GET", "/", {"Origin": "https://eu.partner.io"})
        response = await cors(request, inner)
        assert response.header("access-control-allow-origin") == "https://eu.partner.io"

    async def test_in_a_chain(self) -> None:
        inner = Inner()

        async def tag(request: Request, next) -> Response:
            response = await next(request)
            return response.with_header("X-Outer", "1")

        pipeline = chain((tag, CORSMiddleware(_app_policy())), inner)
        response = await pipeline(Request.build("GET", "/", {"Origin": "https://app.example.com"}))
        assert response.header("x-outer") == "1"
        assert response.header("access-control-allow-origin") == "https://app.example.com"


# -- ASGI wrapper -----------------------------------------------------------


class TestASGIPreflight:
    async def test_allowed_preflight(self) -> None:
        inner = InnerASGI()
        app = CORSASGIMiddleware(inner, _app_policy())
        async with TestClient(app) as client:
            response = await client.preflight(
                "/api/data",
                origin="https://app.example.com",
                method="POST",
                request_headers="Content-Type",
            )
        assert response.status == 200
        assert ("access-control-allow-origin", "https://app.example.com") in response.headers
        assert ("access-control-allow-methods", "POST") in response.headers
        assert ("access-control-allow-headers", "Content-Type") in response.headers
        assert response.body == b""
        assert inner.calls == []

    async def test_denied_preflight(self) -> None:
        inner = InnerASGI()
        app = CORSASGIMiddleware(inner, _app_policy())
        async with TestClient(app) as client:
            response = await client.preflight(
                "/api/data", origin="https://evil.com", method="POST"
            )
        assert response.status == 200
        assert _no_cors_headers(response)
        assert inner.calls == []

    async def test_max_age_and_credentials(self) -> None:
        app = CORSASGIMiddleware(InnerASGI(), _app_policy(allow_credentials=True, max_age=3600))
        async with TestClient(app) as client:
            response = await client.preflight(
                "/", origin="https://app.example.com", method="GET"
            )
        assert ("access-control-max-age", "3600") in response.headers
        assert ("access-control-allow-credentials", "true") in response.headers


class TestASGIActual:
    async def test_allowed_get(self) -> None:
        inner = InnerASGI()
        app = CORSASGIMiddleware(inner, _app_policy(exposed_headers=("X-Request-Id",)))
        async with TestClient(app) as client:
            response = await client.get("/api/data", headers={"Origin": "https://app.example.com"})
        assert response.status == 201
        assert response.body == b"hello"
        assert ("x-inner", "yes") in response.headers
        assert ("access-control-allow-origin", "https://app.example.com") in response.headers
        assert ("access-control-expose-headers", "X-Request-Id") in response.headers
        assert len(inner.calls) == 1

    async def test_no_origin(self) -> None:
        inner = InnerASGI()
        app = CORSASGIMiddleware(inner, _app_policy())
        async with TestClient(app) as client:
            response = await client.get("/api/data")
        assert response.status == 201
        assert _no_cors_headers(response)
        assert len(inner.calls) == 1

    async def test_disallowed_origin_still_reaches_app(self) -> None:
        inner = InnerASGI()
        app = CORSASGIMiddleware(inner, _app_policy())
        async with TestClient(app) as client:
            response = await client.get("/api/data", headers={"Origin": "https://evil.com"})
        assert response.status == 201
        assert ("x-inner", "yes") in response.headers
        assert _no_cors_headers(response)
        assert len(inner.calls) == 1

    async def test_default_config_echoes_any_origin(self) -> None:
        app = CORSASGIMiddleware(InnerASGI(), default_config())
        async with TestClient(app) as client:
            response = await client.post("/", headers={"Origin": "https://anything.dev"})
        assert ("access-control-allow-origin", "https://anything.dev") in response.headers

    async def test_non_http_scope_passes_through(self) -> None:
        seen: list[str] = []

        async def lifespan_app(scope, receive, send) -> None:
            seen.append(scope["type"])

        app = CORSASGIMiddleware(lifespan_app, _app_policy())

        async def receive() -> dict[str, Any]:
            return {"type": "lifespan.startup"}

        async def send(message) -> None:
            return None

        await app({"type": "lifespan"}, receive, send)
        assert seen == ["lifespan"]
