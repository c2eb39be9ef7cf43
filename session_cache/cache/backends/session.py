"""
Session Cache — Session Container Backend

Cache backend that keeps a whole namespace as one blob inside a session
container.

The container only knows how to store, fetch and delete complete blobs, so
every operation reads the namespace blob, changes a private copy of it in
memory and writes the result back with a single container write. A namespace
whose blob becomes empty is deleted from the container instead of being
stored empty.

Concurrency: the read-modify-write cycle is not guarded. Two writers sharing
one namespace (threads, processes, or concurrent requests on one session)
race, and the last container write wins. The container is expected to have a
single consumer at a time.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from ...errors import CacheOperationError, InvalidArgumentError
from ...session.container import SessionContainer
from ..capabilities import Capabilities
from ..interface import LookupResult, StorageInterface
from ..iterator import KeyListIterator
from ..namespace import NamespaceResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Snapshot:
    """Namespace blob as read from the container."""

    namespace: str
    container: SessionContainer
    data: dict[str, Any]
    existed: bool


# ----------------------------------------------------------------------
# Transforms
#
# Each transform changes `data` in place and returns (result, changed).
# ----------------------------------------------------------------------


def _insert(data: dict[str, Any], key: str, value: Any) -> tuple[bool, bool]:
    data[key] = value
    return True, True


def _merge(data: dict[str, Any], items: dict[str, Any]) -> tuple[list[str], bool]:
    data.update(items)
    return [], True


def _add_missing(data: dict[str, Any], items: dict[str, Any]) -> tuple[list[str], bool]:
    existing = [key for key in items if key in data]
    for key, value in items.items():
        if key not in data:
            data[key] = value
    return existing, len(existing) < len(items)


def _replace_existing(data: dict[str, Any], items: dict[str, Any]) -> tuple[list[str], bool]:
    missing = [key for key in items if key not in data]
    for key, value in items.items():
        if key in data:
            data[key] = value
    return missing, len(missing) < len(items)


def _discard(data: dict[str, Any], keys: list[str]) -> tuple[list[str], bool]:
    missing = []
    for key in keys:
        if key in data:
            del data[key]
        else:
            missing.append(key)
    return missing, len(missing) < len(keys)


def _compare_and_swap(data: dict[str, Any], token: Any, key: str, value: Any) -> tuple[bool, bool]:
    if key not in data or data[key] != token:
        return False, False
    data[key] = value
    return True, True


def _apply_deltas(data: dict[str, Any], deltas: dict[str, int]) -> tuple[dict[str, int | float], bool]:
    # Validate everything first so a bad value leaves `data` untouched
    for key in deltas:
        if key in data:
            current = data[key]
            if isinstance(current, bool) or not isinstance(current, (int, float)):
                raise CacheOperationError(
                    f"Cannot change non-numeric value stored under '{key}'",
                    details={"key": key, "type": type(current).__name__},
                )

    result = {}
    for key, delta in deltas.items():
        # Absent keys start at the signed delta itself
        data[key] = data[key] + delta if key in data else delta
        result[key] = data[key]
    return result, True


def _drop_prefixed(data: dict[str, Any], prefix: str) -> tuple[int, bool]:
    doomed = [key for key in data if key.startswith(prefix)]
    for key in doomed:
        del data[key]
    return len(doomed), bool(doomed)


class SessionCacheBackend(StorageInterface):
    """
    Cache backend storing its items in a session container.

    Features:
    - One container read and at most one container write per operation
    - Batch operations report skipped keys instead of raising
    - Prefix clearing, flushing and key iteration
    - No expiration (min_ttl = 0)
    """

    def _options_changed(self) -> None:
        self._resolver = NamespaceResolver(self.options)

    # ------------------------------------------------------------------
    # Container round trip
    # ------------------------------------------------------------------

    def _load(self) -> _Snapshot:
        """Read the namespace blob; an absent namespace reads as an empty mapping."""
        namespace, container = self._resolver.resolve()
        if container.exists(namespace):
            return _Snapshot(namespace, container, dict(container.read(namespace)), existed=True)
        return _Snapshot(namespace, container, {}, existed=False)

    def _store(self, snapshot: _Snapshot) -> None:
        if snapshot.data:
            snapshot.container.write(snapshot.namespace, snapshot.data)
        elif snapshot.existed:
            snapshot.container.delete(snapshot.namespace)
            logger.debug(
                "Namespace '%s' emptied, removed from container",
                snapshot.namespace,
                extra={"namespace": snapshot.namespace},
            )

    def _mutate(self, transform: Callable[[dict[str, Any]], tuple[T, bool]]) -> T:
        """Read the blob, apply ``transform`` to it and write it back if it changed."""
        snapshot = self._load()
        result, changed = transform(snapshot.data)
        if changed:
            self._store(snapshot)
        return result

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _internal_get(self, key: str) -> LookupResult:
        data = self._load().data
        if key not in data:
            return LookupResult()
        value = data[key]
        # Token must not follow in-place changes the caller makes to value
        return LookupResult(value=value, found=True, token=copy.deepcopy(value))

    def _internal_get_many(self, keys: list[str]) -> dict[str, Any]:
        data = self._load().data
        return {key: data[key] for key in keys if key in data}

    def _internal_has(self, key: str) -> bool:
        return key in self._load().data

    def _internal_has_many(self, keys: list[str]) -> list[str]:
        data = self._load().data
        return [key for key in keys if key in data]

    def _internal_get_metadata(self, key: str) -> dict[str, Any] | None:
        # No per-item metadata is recorded; presence is all there is
        return {} if self._internal_has(key) else None

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def _internal_set(self, key: str, value: Any) -> bool:
        return self._mutate(lambda data: _insert(data, key, value))

    def _internal_set_many(self, items: dict[str, Any]) -> list[str]:
        return self._mutate(lambda data: _merge(data, items))

    def _internal_add(self, key: str, value: Any) -> bool:
        existing = self._mutate(lambda data: _add_missing(data, {key: value}))
        return not existing

    def _internal_add_many(self, items: dict[str, Any]) -> list[str]:
        return self._mutate(lambda data: _add_missing(data, items))

    def _internal_replace(self, key: str, value: Any) -> bool:
        missing = self._mutate(lambda data: _replace_existing(data, {key: value}))
        return not missing

    def _internal_replace_many(self, items: dict[str, Any]) -> list[str]:
        return self._mutate(lambda data: _replace_existing(data, items))

    def _internal_check_and_set(self, token: Any, key: str, value: Any) -> bool:
        return self._mutate(lambda data: _compare_and_swap(data, token, key, value))

    def _internal_remove(self, key: str) -> bool:
        missing = self._mutate(lambda data: _discard(data, [key]))
        return not missing

    def _internal_remove_many(self, keys: list[str]) -> list[str]:
        return self._mutate(lambda data: _discard(data, keys))

    def _internal_increment_many(self, deltas: dict[str, int]) -> dict[str, int | float]:
        return self._mutate(lambda data: _apply_deltas(data, deltas))

    # ------------------------------------------------------------------
    # Clearing and iteration
    # ------------------------------------------------------------------

    def clear_by_prefix(self, prefix: str) -> bool:
        """
        Remove every item whose key starts with ``prefix``.

        Matching is case-sensitive and anchored at the start of the key.
        An absent namespace is a successful no-op.

        Raises:
            InvalidArgumentError: If prefix is empty or not a string
        """
        if not isinstance(prefix, str):
            raise InvalidArgumentError(
                f"Prefix must be a string, got {type(prefix).__name__}",
                details={"prefix": repr(prefix)},
            )
        if prefix == "":
            raise InvalidArgumentError("No prefix given", details={"prefix": prefix})

        removed = self._mutate(lambda data: _drop_prefixed(data, prefix))
        logger.debug(
            "Cleared %d item(s) with prefix '%s'",
            removed,
            prefix,
            extra={"prefix": prefix, "namespace": self.options.namespace, "removed": removed},
        )
        return True

    def flush(self) -> bool:
        """Replace the namespace blob with an empty mapping."""
        namespace, container = self._resolver.resolve()
        container.replace_all(namespace, {})
        logger.info("Flushed session cache namespace '%s'", namespace, extra={"namespace": namespace})
        return True

    def iterate(self) -> KeyListIterator:
        """Return an iterator over the keys stored right now."""
        return KeyListIterator(self, list(self._load().data))

    def __iter__(self) -> KeyListIterator:
        return self.iterate()

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def _internal_get_capabilities(self) -> Capabilities:
        return Capabilities(
            supported_datatypes={
                "null": True,
                "boolean": True,
                "integer": True,
                "float": True,
                "string": True,
                "array": "array",
                "object": "object",
                "resource": False,
            },
            supported_metadata=(),
            min_ttl=0,
            max_ttl=0,
            max_key_length=0,
            namespace_is_prefix=False,
            namespace_separator="",
        )
