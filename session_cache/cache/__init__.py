"""
Session Cache — Cache Module

Key-value cache storage kept inside a session container.

- factory.py: Creation and registry of named cache instances
- interface.py: Abstract storage contract all backends implement
- backends/: Backend implementations

Usage:
    from session_cache.cache import create_cache

    cache = create_cache()
    cache.set("key", "value")
    value, found, token = cache.get("key")
"""

from .backends.session import SessionCacheBackend
from .capabilities import Capabilities
from .factory import (
    create_cache,
    get_cache,
    list_cache_instances,
    reset_cache_factory,
)
from .interface import LookupResult, StorageInterface
from .iterator import IteratorMode, KeyListIterator
from .namespace import NamespaceResolver
from .options import SessionCacheOptions

__all__ = [
    # Factory functions
    "create_cache",
    "get_cache",
    "list_cache_instances",
    "reset_cache_factory",
    # Interface
    "StorageInterface",
    "LookupResult",
    # Backend and collaborators
    "SessionCacheBackend",
    "SessionCacheOptions",
    "NamespaceResolver",
    "Capabilities",
    "KeyListIterator",
    "IteratorMode",
]
