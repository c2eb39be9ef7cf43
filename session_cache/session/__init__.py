"""
Session Cache — Session Containers

Backing containers the cache adapter stores its namespace blobs in.
"""

from .container import MemorySessionContainer, SessionContainer

__all__ = [
    "MemorySessionContainer",
    "SessionContainer",
]
