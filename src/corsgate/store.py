"""Policy store — normalized allow-lists built once from a CORSConfig.

Origins live in a separate immutable ``OriginPolicy`` snapshot so they
can be hot-refreshed: ``refresh_origins()`` builds a complete new
snapshot and swaps it in with a single attribute assignment. Readers
grab the reference once and never observe a half-updated set.

Everything else (methods, headers, credentials, max-age) is fixed for
the lifetime of the store.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import dataclass

from corsgate.config import DEFAULT_HEADERS, DEFAULT_METHODS, CORSConfig, coerce_list
from corsgate.wildcard import WildcardPattern


@dataclass(frozen=True, slots=True)
class OriginPolicy:
    """Immutable origin allow-list.

    ``configured`` keeps the normalized entries in their original order
    for diagnostics; matching uses ``exact`` and ``wildcards``.
    """

    allow_all: bool
    exact: frozenset[str] = frozenset()
    wildcards: tuple[WildcardPattern, ...] = ()
    configured: tuple[str, ...] = ("*",)

    @classmethod
    def build(cls, origins: Iterable[str]) -> OriginPolicy:
        """Normalize configured origins.

        An empty list, or any ``*`` entry, allows every origin. A ``*``
        entry discards whatever was collected before it.
        """
        exact: set[str] = set()
        wildcards: list[WildcardPattern] = []
        configured: list[str] = []

        for origin in origins:
            origin = origin.lower()
            if origin == "*":
                return cls(allow_all=True)
            if "*" in origin:
                wildcards.append(WildcardPattern.parse(origin))
            else:
                exact.add(origin)
            configured.append(origin)

        if not configured:
            return cls(allow_all=True)

        return cls(
            allow_all=False,
            exact=frozenset(exact),
            wildcards=tuple(wildcards),
            configured=tuple(configured),
        )


class PolicyStore:
    """Normalized CORS policy state.

    Build with ``PolicyStore.from_config(config)`` (or ``build(config)``).
    Reads are lock-free; concurrent refreshes are serialized so the last
    writer wins cleanly.
    """

    __slots__ = (
        "_origins",
        "_refresh_lock",
        "allow_all_headers",
        "allow_credentials",
        "allowed_headers",
        "allowed_methods",
        "exposed_headers",
        "max_age",
    )

    def __init__(
        self,
        *,
        origins: OriginPolicy,
        allowed_methods: tuple[str, ...],
        allowed_headers: tuple[str, ...],
        allow_all_headers: bool,
        exposed_headers: tuple[str, ...],
        allow_credentials: bool,
        max_age: int,
    ) -> None:
        self._origins = origins
        self._refresh_lock = threading.Lock()
        self.allowed_methods = allowed_methods
        self.allowed_headers = allowed_headers
        self.allow_all_headers = allow_all_headers
        self.exposed_headers = exposed_headers
        self.allow_credentials = allow_credentials
        self.max_age = max_age

    @classmethod
    def from_config(cls, config: CORSConfig) -> PolicyStore:
        """Normalize *config* into a store."""
        headers = config.allowed_headers
        if not headers:
            # Defaults are an enumerated set, not allow-all
            headers = DEFAULT_HEADERS
            allow_all_headers = False
        else:
            allow_all_headers = "*" in headers

        return cls(
            origins=OriginPolicy.build(config.allowed_origins),
            allowed_methods=config.allowed_methods or DEFAULT_METHODS,
            allowed_headers=headers,
            allow_all_headers=allow_all_headers,
            exposed_headers=config.exposed_headers,
            allow_credentials=config.allow_credentials,
            max_age=config.max_age,
        )

    @property
    def origins(self) -> OriginPolicy:
        """The current origin snapshot."""
        return self._origins

    def refresh_origins(self, origins: Iterable[str]) -> OriginPolicy:
        """Replace the origin allow-list and return the new snapshot.

        Idempotent. Methods, headers, credentials and max-age are untouched.
        """
        snapshot = OriginPolicy.build(coerce_list("origins", origins))
        with self._refresh_lock:
            self._origins = snapshot
        return snapshot

    def __repr__(self) -> str:
        origins = self._origins
        return (
            f"PolicyStore(origins={'*' if origins.allow_all else list(origins.configured)!r}, "
            f"methods={list(self.allowed_methods)!r}, "
            f"headers={'*' if self.allow_all_headers else list(self.allowed_headers)!r})"
        )


def build(config: CORSConfig) -> PolicyStore:
    """Build a PolicyStore from *config*."""
    return PolicyStore.from_config(config)
