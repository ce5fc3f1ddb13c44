"""Policy engine — pure allow/deny predicates over a PolicyStore.

Every predicate is total: bad or missing input (an empty origin, an
unknown method) evaluates to ``False`` through ordinary comparison and
never raises.

Origins compare case-insensitively. Methods and header names compare
case-sensitively, exactly as configured.
"""

from collections.abc import Sequence

from corsgate.store import PolicyStore


class PolicyEngine:
    """Answers "is this allowed?" for origins, methods, and header lists."""

    __slots__ = ("store",)

    def __init__(self, store: PolicyStore) -> None:
        self.store = store

    def origin_allowed(self, origin: str) -> bool:
        """True if *origin* is allowed (exact match first, then wildcards)."""
        # One read of the snapshot per call; a concurrent refresh can't tear it
        origins = self.store.origins
        if origins.allow_all:
            return True
        origin = origin.lower()
        if origin in origins.exact:
            return True
        return any(pattern.matches(origin) for pattern in origins.wildcards)

    def method_allowed(self, method: str) -> bool:
        """True if *method* is allowed. ``OPTIONS`` always is."""
        methods = self.store.allowed_methods
        if not methods:
            return False
        if method == "OPTIONS":
            return True
        return method in methods

    def headers_allowed(self, requested: Sequence[str]) -> bool:
        """True if every requested header is allowed.

        One unknown header fails the whole list.
        """
        if self.store.allow_all_headers or not requested:
            return True
        allowed = self.store.allowed_headers
        return all(header in allowed for header in requested)
