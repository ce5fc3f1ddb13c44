"""Middleware — Protocol-based, no inheritance required.

Built-in middleware:
    CORSMiddleware -- Cross-Origin Resource Sharing policy enforcement
"""

from corsgate.middleware.cors import CORSMiddleware
from corsgate.middleware.protocol import Middleware, Next, chain

__all__ = ["CORSMiddleware", "Middleware", "Next", "chain"]
