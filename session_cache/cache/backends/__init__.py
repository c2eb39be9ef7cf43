"""
Session Cache — Cache Backends

Exports available cache backend implementations.
"""

from .session import SessionCacheBackend

__all__ = [
    "SessionCacheBackend",
]
