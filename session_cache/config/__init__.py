"""
Session Cache — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    CacheConfig,
    Environment,
    LogLevel,
    SessionCacheConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "SessionCacheConfig",
    # Enums
    "Environment",
    "LogLevel",
    # Config sections
    "CacheConfig",
]
