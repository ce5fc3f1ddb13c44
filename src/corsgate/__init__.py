"""Corsgate — a CORS policy engine for Python HTTP services.

Decides, per request, whether a cross-origin caller may proceed and
which ``Access-Control-*`` headers say so. Preflights are answered by
the middleware; actual requests always reach the application.

Request/next pipelines::

    from corsgate import CORSConfig, CORSMiddleware

    cors = CORSMiddleware(CORSConfig(
        allowed_origins=("https://app.example.com", "https://*.example.com"),
        allowed_headers=("Content-Type",),
    ))

Any ASGI application::

    from corsgate import CORSASGIMiddleware

    app = CORSASGIMiddleware(app, CORSConfig.from_env())
"""

__version__ = "0.1.0"
__all__ = [
    "CORSASGIMiddleware",
    "CORSConfig",
    "CORSDecision",
    "CORSHandler",
    "CORSMiddleware",
    "ConfigurationError",
    "CorsgateError",
    "DiagnosticLogger",
    "OffLogger",
    "OriginPolicy",
    "PolicyEngine",
    "PolicyStore",
    "SinkLogger",
    "WildcardPattern",
    "default_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import corsgate`` fast while providing a clean top-level API.
    """
    if name in ("CORSConfig", "default_config"):
        from corsgate import config as _config

        return getattr(_config, name)

    if name in ("CORSHandler", "CORSDecision"):
        from corsgate import handler as _handler

        return getattr(_handler, name)

    if name == "CORSMiddleware":
        from corsgate.middleware.cors import CORSMiddleware

        return CORSMiddleware

    if name == "CORSASGIMiddleware":
        from corsgate.asgi import CORSASGIMiddleware

        return CORSASGIMiddleware

    if name in ("PolicyStore", "OriginPolicy"):
        from corsgate import store as _store

        return getattr(_store, name)

    if name == "PolicyEngine":
        from corsgate.engine import PolicyEngine

        return PolicyEngine

    if name == "WildcardPattern":
        from corsgate.wildcard import WildcardPattern

        return WildcardPattern

    if name in ("DiagnosticLogger", "OffLogger", "SinkLogger"):
        from corsgate import diagnostics as _diag

        return getattr(_diag, name)

    if name in ("CorsgateError", "ConfigurationError"):
        from corsgate import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
