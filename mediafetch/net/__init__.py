"""
Network Layer.

This package owns sockets: plain and TLS connections, proxy tunnelling, the
keep-alive pool, and the HTTP/1.x wire format.
"""

from .connection import Connection, ConnectionManager, KeepAlivePool
from .http import ResponseHead, Target, build_request, split_target

__all__ = [
    "Connection",
    "ConnectionManager",
    "KeepAlivePool",
    "ResponseHead",
    "Target",
    "build_request",
    "split_target",
]
