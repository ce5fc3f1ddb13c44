"""Corsgate exception hierarchy.

Policy decisions never raise: a denied origin, method, or header list is
an ordinary outcome. Only loading configuration can fail.
"""


class CorsgateError(Exception):
    """Base for all corsgate-specific errors."""


class ConfigurationError(CorsgateError):
    """Raised when CORS configuration is invalid.

    Typically raised by ``CORSConfig.from_env()`` for unparsable values,
    or at construction when a list field is given a bare string.
    """
