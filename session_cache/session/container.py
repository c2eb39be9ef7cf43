"""
Session Cache — Session Container

Defines the interface the cache adapter consumes from its backing container
and a mapping-backed implementation of it.

A container holds one blob (a mapping of key -> value) per namespace. It has
no per-key operations: callers read a whole blob, change it and write the
whole blob back.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol, runtime_checkable

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionContainer(Protocol):
    """Whole-blob store scoped by namespace."""

    def exists(self, namespace: str) -> bool: ...

    def read(self, namespace: str) -> dict[str, Any]: ...

    def write(self, namespace: str, blob: Mapping[str, Any]) -> None: ...

    def delete(self, namespace: str) -> None: ...

    def replace_all(self, namespace: str, blob: Mapping[str, Any]) -> dict[str, Any] | None: ...


class MemorySessionContainer:
    """
    Session container backed by a mutable mapping.

    The container keeps its partition under ``storage[name]``. ``storage``
    defaults to a private dict but may be any ``MutableMapping``, for example
    a web framework's per-request session object. Every write reassigns
    ``storage[name]`` with a fresh dict so session implementations that track
    top-level assignment notice the change.

    Blobs are deep-copied on the way in and out, so stored values only
    change through a container write.
    """

    def __init__(
        self,
        name: str = "Default",
        storage: MutableMapping[str, Any] | None = None,
    ):
        """
        Initialize the container.

        Args:
            name: Partition name inside ``storage``
            storage: Backing mapping (a new dict when omitted)
        """
        self.name = name
        self._storage: MutableMapping[str, Any] = storage if storage is not None else {}

    def _partition(self) -> dict[str, Any]:
        partition = self._storage.get(self.name)
        if partition is None:
            return {}
        if not isinstance(partition, Mapping):
            raise ConfigurationError(
                f"Session storage entry '{self.name}' is not a mapping",
                details={"container": self.name, "type": type(partition).__name__},
            )
        return dict(partition)

    def _commit(self, partition: dict[str, Any]) -> None:
        self._storage[self.name] = partition

    def exists(self, namespace: str) -> bool:
        return namespace in self._partition()

    def read(self, namespace: str) -> dict[str, Any]:
        """Return a deep copy of the blob stored under namespace. Raises KeyError if absent."""
        return copy.deepcopy(dict(self._partition()[namespace]))

    def write(self, namespace: str, blob: Mapping[str, Any]) -> None:
        partition = self._partition()
        partition[namespace] = copy.deepcopy(dict(blob))
        self._commit(partition)

    def delete(self, namespace: str) -> None:
        partition = self._partition()
        if namespace in partition:
            del partition[namespace]
            self._commit(partition)

    def replace_all(self, namespace: str, blob: Mapping[str, Any]) -> dict[str, Any] | None:
        """
        Exchange the blob stored under namespace.

        Unlike ``write``, this always leaves the namespace present, even when
        ``blob`` is empty.

        Returns:
            The previous blob, or None if the namespace was absent
        """
        partition = self._partition()
        previous = partition.get(namespace)
        partition[namespace] = copy.deepcopy(dict(blob))
        self._commit(partition)
        logger.debug(
            "Replaced session container namespace '%s'",
            namespace,
            extra={"container": self.name, "namespace": namespace, "size": len(blob)},
        )
        return copy.deepcopy(dict(previous)) if previous is not None else None

    def __repr__(self) -> str:
        return f"MemorySessionContainer(name={self.name!r})"
