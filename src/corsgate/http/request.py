"""Immutable HTTP request.

Only the metadata CORS needs: method, path and headers. The body is
never read here; it stays with the ASGI receive channel for the inner
handler.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from corsgate.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request view."""

    method: str
    path: str
    headers: Headers

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            method=scope["method"],
            path=scope.get("path", "/"),
            headers=Headers(tuple(scope.get("headers", ()))),
        )

    @classmethod
    def build(
        cls,
        method: str,
        path: str = "/",
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Create a Request from plain strings."""
        return cls(method=method.upper(), path=path, headers=Headers.from_mapping(headers))
