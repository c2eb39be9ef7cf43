"""
Session Cache — Namespace Resolver

Resolves the namespace and backing container a cache operation works on.
"""

from __future__ import annotations

from ..errors import ConfigurationError
from ..session.container import SessionContainer
from .options import SessionCacheOptions


class NamespaceResolver:
    """Reads namespace and container from adapter options."""

    def __init__(self, options: SessionCacheOptions):
        self.options = options

    def resolve(self) -> tuple[str, SessionContainer]:
        """
        Resolve the current namespace and container.

        The namespace is returned as configured, the empty string included.

        Raises:
            ConfigurationError: If no container is configured
        """
        container = self.options.container
        if container is None:
            raise ConfigurationError(
                "No session container configured",
                details={"namespace": self.options.namespace, "reason": "container_missing"},
            )
        return self.options.namespace, container
