"""Denial diagnostics — a logger capability with an off switch.

The policy engine never branches on "is logging enabled". It always
calls ``logger.log(...)``; what happens next depends on which
implementation was injected:

- ``OffLogger``: discards everything (the default)
- ``SinkLogger``: forwards to a stdlib ``logging.Logger``

Anything with a matching ``log`` method works::

    class ListLogger:
        def __init__(self) -> None:
            self.lines: list[str] = []

        def log(self, *parts: object) -> None:
            self.lines.append("".join(str(p) for p in parts))
"""

import logging
from typing import Protocol

logger = logging.getLogger("corsgate.cors")


class DiagnosticLogger(Protocol):
    """Records a diagnostic message composed of ordered parts."""

    def log(self, *parts: object) -> None: ...


class OffLogger:
    """Discards every message."""

    __slots__ = ()

    def log(self, *parts: object) -> None:  # noqa: ARG002
        return None


class SinkLogger:
    """Writes each message as one record on a stdlib logger.

    Parts are rendered with ``str()`` and concatenated in order.
    """

    __slots__ = ("level", "sink")

    def __init__(self, sink: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.sink = sink or logger
        self.level = level

    def log(self, *parts: object) -> None:
        if not self.sink.isEnabledFor(self.level):
            return
        self.sink.log(self.level, "%s", "".join(str(part) for part in parts))
