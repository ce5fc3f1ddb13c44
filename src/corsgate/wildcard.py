"""Wildcard origin patterns.

A pattern holds at most one ``*``. It is stored as the text before and
after the star, and a candidate matches when it carries both without
the two overlapping::

    pattern = WildcardPattern.parse("https://*.example.com")
    pattern.matches("https://api.example.com")  # True
    pattern.matches("https://example.com")  # False
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WildcardPattern:
    """A single-``*`` pattern split into prefix and suffix.

    Only the first ``*`` is special. Any later ``*`` stays in the suffix
    as literal text.
    """

    prefix: str
    suffix: str

    @classmethod
    def parse(cls, pattern: str) -> WildcardPattern:
        """Split *pattern* at its first ``*``.

        Raises:
            ValueError: If *pattern* contains no ``*``.
        """
        head, star, tail = pattern.partition("*")
        if not star:
            msg = f"Not a wildcard pattern: {pattern!r}"
            raise ValueError(msg)
        return cls(prefix=head, suffix=tail)

    def matches(self, candidate: str) -> bool:
        """True if *candidate* starts with the prefix and ends with the suffix."""
        return match(self, candidate)

    def __str__(self) -> str:
        return f"{self.prefix}*{self.suffix}"


def match(pattern: WildcardPattern, candidate: str) -> bool:
    """Test *candidate* against *pattern*.

    No normalization happens here. Callers lower-case both sides before
    comparing origins.
    """
    return (
        len(candidate) >= len(pattern.prefix) + len(pattern.suffix)
        and candidate.startswith(pattern.prefix)
        and candidate.endswith(pattern.suffix)
    )
