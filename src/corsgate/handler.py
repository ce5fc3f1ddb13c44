"""Request classifier and header writer.

Given a request method and headers, ``CORSHandler`` picks one of two
paths and returns a ``CORSDecision`` carrying the response headers to
write:

- **Preflight** (``OPTIONS``): origin, requested method and requested
  headers must all pass. The allowed origin and the single requested
  method are echoed back. Adapters never call the inner handler and
  always answer 200, even for a denial.
- **Actual** (anything else): an allowed origin is echoed back along
  with exposed headers. Adapters always call the inner handler.

A denial writes nothing. Browsers enforce CORS by the absence of
headers, so a denied request looks exactly like a same-origin one on
the wire. The only trace is a diagnostic line, if a logger is wired in.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Literal, TypeAlias

from corsgate.config import CORSConfig
from corsgate.diagnostics import DiagnosticLogger
from corsgate.engine import PolicyEngine
from corsgate.store import OriginPolicy, PolicyStore

# Request headers
ORIGIN = "Origin"
REQUEST_METHOD = "Access-Control-Request-Method"
REQUEST_HEADERS = "Access-Control-Request-Headers"

# Response headers
ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
MAX_AGE = "Access-Control-Max-Age"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"

DecisionKind: TypeAlias = Literal["preflight", "actual"]
DenialReason: TypeAlias = Literal["origin", "method", "headers"]


@dataclass(frozen=True, slots=True)
class CORSDecision:
    """Outcome of evaluating one request.

    ``allowed`` is False both for a denial (``reason`` says which check
    failed) and for a request that carries no ``Origin`` at all
    (``reason`` is None).
    """

    kind: DecisionKind
    allowed: bool
    headers: tuple[tuple[str, str], ...] = ()
    reason: DenialReason | None = None

    @property
    def is_preflight(self) -> bool:
        return self.kind == "preflight"


def parse_header_list(value: str | None) -> list[str]:
    """Split an ``Access-Control-Request-Headers`` value.

    Entries are whitespace-trimmed; empty entries are dropped.
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class CORSHandler:
    """Classifies requests and derives CORS response headers.

    Usage::

        handler = CORSHandler(CORSConfig(
            allowed_origins=("https://app.example.com",),
            allowed_headers=("Content-Type",),
        ))
        decision = handler.evaluate("OPTIONS", request.headers)
        for name, value in decision.headers:
            ...
    """

    __slots__ = ("engine", "logger", "store")

    def __init__(
        self,
        config: CORSConfig | None = None,
        *,
        logger: DiagnosticLogger | None = None,
    ) -> None:
        config = config or CORSConfig()
        self.store = PolicyStore.from_config(config)
        self.engine = PolicyEngine(self.store)
        self.logger = logger or config.resolve_logger()

    # -- Classification --

    @staticmethod
    def is_preflight(method: str) -> bool:
        """True if *method* selects the preflight path."""
        return method == "OPTIONS"

    def evaluate(self, method: str, headers: Mapping[str, str]) -> CORSDecision:
        """Run the path selected by *method*."""
        if self.is_preflight(method):
            return self.preflight(headers)
        return self.actual(headers)

    # -- Preflight path --

    def preflight(self, headers: Mapping[str, str]) -> CORSDecision:
        """Evaluate a preflight request."""
        origin = headers.get(ORIGIN) or ""
        if not origin or not self.engine.origin_allowed(origin):
            self._deny("Origin ", origin, " is not in ", self._origin_list())
            return CORSDecision("preflight", allowed=False, reason="origin")

        method = headers.get(REQUEST_METHOD) or ""
        if not self.engine.method_allowed(method):
            self._deny("Method ", method, " is not in ", list(self.store.allowed_methods))
            return CORSDecision("preflight", allowed=False, reason="method")

        requested = parse_header_list(headers.get(REQUEST_HEADERS))
        if not self.engine.headers_allowed(requested):
            self._deny("Headers ", requested, " is not in ", list(self.store.allowed_headers))
            return CORSDecision("preflight", allowed=False, reason="headers")

        out: list[tuple[str, str]] = [
            (ALLOW_ORIGIN, origin),
            (ALLOW_METHODS, method),
        ]
        if requested:
            out.append((ALLOW_HEADERS, ", ".join(requested)))
        if self.store.allow_credentials:
            out.append((ALLOW_CREDENTIALS, "true"))
        if self.store.max_age > 0:
            out.append((MAX_AGE, str(self.store.max_age)))
        return CORSDecision("preflight", allowed=True, headers=tuple(out))

    # -- Actual-request path --

    def actual(self, headers: Mapping[str, str]) -> CORSDecision:
        """Evaluate a non-preflight request."""
        origin = headers.get(ORIGIN) or ""
        if not origin:
            # Same-origin or non-browser client; nothing to say
            return CORSDecision("actual", allowed=False)
        if not self.engine.origin_allowed(origin):
            self._deny("Origin ", origin, " is not in ", self._origin_list())
            return CORSDecision("actual", allowed=False, reason="origin")

        out: list[tuple[str, str]] = [(ALLOW_ORIGIN, origin)]
        if self.store.exposed_headers:
            out.append((EXPOSE_HEADERS, ", ".join(self.store.exposed_headers)))
        if self.store.allow_credentials:
            out.append((ALLOW_CREDENTIALS, "true"))
        return CORSDecision("actual", allowed=True, headers=tuple(out))

    # -- Refresh --

    def refresh_origins(self, origins: Iterable[str]) -> OriginPolicy:
        """Replace the allowed origins at runtime."""
        return self.store.refresh_origins(origins)

    # -- Internal --

    def _origin_list(self) -> list[str]:
        return list(self.store.origins.configured)

    def _deny(self, *parts: object) -> None:
        self.logger.log(*parts)
