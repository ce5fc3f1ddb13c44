"""Test utilities for CORS-wrapped ASGI applications.

    from corsgate.testing import TestClient
"""

from corsgate.testing.client import TestClient

__all__ = ["TestClient"]
