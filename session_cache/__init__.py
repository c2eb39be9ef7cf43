"""
Session Cache — Key-Value Cache in a Session Container

Namespaced cache storage that keeps all of its items as one blob inside an
externally supplied session container.
"""

__version__ = "1.0.0"

from .cache import (
    Capabilities,
    LookupResult,
    SessionCacheBackend,
    SessionCacheOptions,
    StorageInterface,
    create_cache,
    get_cache,
)
from .errors import ConfigurationError, InvalidArgumentError, SessionCacheError
from .session import MemorySessionContainer, SessionContainer

__all__ = [
    "Capabilities",
    "ConfigurationError",
    "InvalidArgumentError",
    "LookupResult",
    "MemorySessionContainer",
    "SessionCacheBackend",
    "SessionCacheError",
    "SessionCacheOptions",
    "SessionContainer",
    "StorageInterface",
    "create_cache",
    "get_cache",
]
