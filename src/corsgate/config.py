"""CORS configuration.

CORSConfig is a frozen dataclass, immutable after creation, built once
at startup and handed to the handler. Origins can still change later
through ``CORSHandler.refresh_origins()``; the config itself never does.

There is no shared default object. ``default_config()`` builds a fresh
value on every call.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from corsgate.errors import ConfigurationError

if TYPE_CHECKING:
    from corsgate.diagnostics import DiagnosticLogger

DEFAULT_METHODS: tuple[str, ...] = ("GET", "POST")
DEFAULT_HEADERS: tuple[str, ...] = ("Origin", "Accept", "Content-Type")

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})

_LIST_FIELDS = ("allowed_origins", "allowed_methods", "allowed_headers", "exposed_headers")


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS policy configuration. Immutable after creation.

    Empty lists have meaning:

    - ``allowed_origins=()`` allows every origin
    - ``allowed_methods=()`` falls back to ``GET, POST``
    - ``allowed_headers=()`` falls back to ``Origin, Accept, Content-Type``

    Override what you need::

        CORSConfig(
            allowed_origins=("https://app.example.com", "https://*.example.com"),
            allowed_methods=("GET", "POST", "PUT"),
            allowed_headers=("Content-Type", "Authorization"),
            allow_credentials=True,
            max_age=600,
        )
    """

    allowed_origins: tuple[str, ...] = ()
    allowed_methods: tuple[str, ...] = ()
    allowed_headers: tuple[str, ...] = ()
    exposed_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 0  # seconds; 0 or negative leaves Access-Control-Max-Age unset

    # Diagnostics
    debug: bool = False
    logger: DiagnosticLogger | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Accept lists (and other sequences) but store tuples
        for name in _LIST_FIELDS:
            object.__setattr__(self, name, coerce_list(f"CORSConfig.{name}", getattr(self, name)))

    def resolve_logger(self) -> DiagnosticLogger:
        """Pick the diagnostic logger: explicit > debug sink > off."""
        from corsgate.diagnostics import OffLogger, SinkLogger

        if self.logger is not None:
            return self.logger
        if self.debug:
            return SinkLogger()
        return OffLogger()

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = "CORS_",
        **overrides: Any,
    ) -> CORSConfig:
        """Build a config from environment variables.

        Reads ``{prefix}ALLOWED_ORIGINS``, ``{prefix}ALLOWED_METHODS``,
        ``{prefix}ALLOWED_HEADERS``, ``{prefix}EXPOSED_HEADERS``
        (comma-separated), ``{prefix}ALLOW_CREDENTIALS``, ``{prefix}DEBUG``
        (true/false) and ``{prefix}MAX_AGE`` (seconds). Unset variables keep
        the dataclass defaults; keyword *overrides* win over both.

        Raises:
            ConfigurationError: If a boolean or integer value cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for name in _LIST_FIELDS:
            raw = env.get(prefix + name.upper())
            if raw is not None:
                values[name] = split_list(raw)

        for name in ("allow_credentials", "debug"):
            raw = env.get(prefix + name.upper())
            if raw is not None:
                values[name] = _parse_bool(prefix + name.upper(), raw)

        raw_max_age = env.get(prefix + "MAX_AGE")
        if raw_max_age is not None:
            try:
                values["max_age"] = int(raw_max_age.strip() or "0")
            except ValueError:
                msg = f"{prefix}MAX_AGE must be an integer number of seconds, got {raw_max_age!r}"
                raise ConfigurationError(msg) from None

        values.update(overrides)
        return cls(**values)


def default_config(**overrides: Any) -> CORSConfig:
    """Return a fresh permissive config: any origin, ``GET``/``POST``, simple headers."""
    values: dict[str, Any] = {
        "allowed_origins": ("*",),
        "allowed_methods": DEFAULT_METHODS,
        "allowed_headers": DEFAULT_HEADERS,
    }
    values.update(overrides)
    return CORSConfig(**values)


def split_list(raw: str) -> tuple[str, ...]:
    """Split a comma-separated value, trimming whitespace and dropping empties."""
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    msg = f"{name} must be a boolean (true/false), got {raw!r}"
    raise ConfigurationError(msg)


def coerce_list(name: str, value: Iterable[str] | str) -> tuple[str, ...]:
    """Coerce a refresh argument to a tuple, rejecting a bare string."""
    if isinstance(value, (str, bytes)):
        msg = f"{name} must be a sequence of strings, not {type(value).__name__}"
        raise ConfigurationError(msg)
    return tuple(value)
