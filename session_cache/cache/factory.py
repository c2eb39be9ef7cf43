"""
Session Cache — Cache Factory

Canonical factory for creating session cache instances from configuration.

Key points:
- Instances are registered by name and reused on later calls
- Without an explicit container, a MemorySessionContainer named after
  ``CacheConfig.container_name`` is created
- All configuration is typed and validated via Pydantic models

Examples:
    from session_cache.cache.factory import create_cache, get_cache

    # Uses env-configured namespace and options
    cache = create_cache()

    # Or store the cache inside a web framework's session mapping
    from session_cache.config import CacheConfig
    from session_cache.session import MemorySessionContainer

    container = MemorySessionContainer(storage=request.session)
    cache = create_cache(CacheConfig(namespace="cart"), name="cart", container=container)
"""

from __future__ import annotations

import logging

from ..config import CacheConfig, get_config
from ..errors import ConfigurationError
from ..session.container import MemorySessionContainer, SessionContainer
from .backends.session import SessionCacheBackend
from .options import SessionCacheOptions

logger = logging.getLogger(__name__)

# Global cache instances registry
_cache_instances: dict[str, SessionCacheBackend] = {}


def create_cache(
    config: CacheConfig | None = None,
    name: str = "default",
    container: SessionContainer | None = None,
) -> SessionCacheBackend:
    """
    Create a session cache instance based on configuration.

    Args:
        config: Cache configuration (uses global config if not provided)
        name: Cache instance name (for multiple cache instances)
        container: Backing session container (a new memory container if omitted)

    Returns:
        Configured cache instance

    Raises:
        ConfigurationError: If the cache cannot be constructed
    """
    if name in _cache_instances:
        logger.debug("Returning existing cache instance: %s", name)
        return _cache_instances[name]

    if config is None:
        config = get_config().cache

    if container is None:
        container = MemorySessionContainer(name=config.container_name)

    logger.info(
        "Creating cache instance '%s' in namespace '%s'",
        name,
        config.namespace,
        extra={"cache_name": name, "namespace": config.namespace, "container": repr(container)},
    )

    try:
        options = SessionCacheOptions(
            namespace=config.namespace,
            container=container,
            readable=config.readable,
            writable=config.writable,
            key_pattern=config.key_pattern,
        )
        cache = SessionCacheBackend(options)
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error creating cache instance '%s': %s",
            name,
            e,
            extra={"cache_name": name, "namespace": config.namespace, "error": str(e)},
            exc_info=True,
        )
        raise ConfigurationError(
            f"Failed to create cache instance '{name}': {e}",
            details={"cache_name": name, "namespace": config.namespace, "error": str(e)},
        ) from e

    _cache_instances[name] = cache
    return cache


def get_cache(name: str = "default") -> SessionCacheBackend:
    """
    Get an existing cache instance by name.

    If the instance doesn't exist, it is created from the global configuration.
    """
    if name not in _cache_instances:
        logger.debug("Cache instance '%s' not found, creating new instance", name)
        return create_cache(name=name)

    return _cache_instances[name]


def reset_cache_factory() -> None:
    """
    Clear all registered instance references.

    Used for testing and hot-reload scenarios. Containers are not touched.
    """
    count = len(_cache_instances)
    _cache_instances.clear()
    logger.debug("Reset cache factory, cleared %d instance reference(s)", count)


def list_cache_instances() -> list[str]:
    """List all registered cache instance names."""
    return list(_cache_instances.keys())
