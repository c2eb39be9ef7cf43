"""
Session Cache — Storage Interface

Defines the abstract storage contract every cache adapter implements.

The public methods normalize keys, apply the readable/writable switches of
the adapter options and log; the actual storage work is delegated to the
``_internal_*`` hooks that backends implement.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from pydantic import ValidationError

from ..errors import InvalidArgumentError
from .capabilities import Capabilities
from .options import SessionCacheOptions

logger = logging.getLogger(__name__)


class LookupResult(NamedTuple):
    """Result of a single-key lookup."""

    value: Any = None
    found: bool = False
    # Value seen at read time, for check_and_set()
    token: Any = None


class StorageInterface(ABC):
    """
    Abstract base class for cache storage adapters.

    Lookups that miss, conditional writes that don't apply and removals of
    absent keys are reported through return values, never raised.
    """

    def __init__(self, options: SessionCacheOptions | Mapping[str, Any] | None = None):
        """
        Initialize the adapter.

        Args:
            options: Adapter options, or a mapping of option values
        """
        self._options: SessionCacheOptions = SessionCacheOptions()
        self._capabilities: Capabilities | None = None
        self.set_options(options if options is not None else SessionCacheOptions())

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    @property
    def options(self) -> SessionCacheOptions:
        return self._options

    def set_options(self, options: SessionCacheOptions | Mapping[str, Any]) -> StorageInterface:
        """
        Replace the adapter options.

        Raises:
            InvalidArgumentError: If a mapping of options fails validation
        """
        if not isinstance(options, SessionCacheOptions):
            try:
                options = SessionCacheOptions(**dict(options))
            except ValidationError as e:
                raise InvalidArgumentError(
                    "Invalid cache options",
                    details={"validation_errors": e.errors(include_url=False)},
                ) from e
        self._options = options
        self._options_changed()
        return self

    def _options_changed(self) -> None:
        """Hook called after options are replaced."""

    # ------------------------------------------------------------------
    # Key normalization
    # ------------------------------------------------------------------

    def _normalize_key(self, key: Any) -> str:
        if not isinstance(key, str):
            raise InvalidArgumentError(
                f"Key must be a string, got {type(key).__name__}",
                details={"key": repr(key)},
            )
        if key == "":
            raise InvalidArgumentError("An empty key isn't allowed", details={"key": key})

        pattern = self._options.key_pattern
        if pattern and not re.search(pattern, key):
            raise InvalidArgumentError(
                f"The key '{key}' doesn't match against pattern '{pattern}'",
                details={"key": key, "pattern": pattern},
            )
        return key

    def _normalize_keys(self, keys: Iterable[str]) -> list[str]:
        """Normalize a collection of keys, dropping duplicates but keeping order."""
        if isinstance(keys, str):
            raise InvalidArgumentError("Expected a collection of keys, got a single string", details={"keys": keys})
        return list(dict.fromkeys(self._normalize_key(key) for key in keys))

    def _normalize_items(self, items: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(items, Mapping):
            raise InvalidArgumentError(
                f"Expected a mapping of keys to values, got {type(items).__name__}",
            )
        return {self._normalize_key(key): value for key, value in items.items()}

    @staticmethod
    def _check_delta(delta: Any) -> int:
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise InvalidArgumentError(
                f"Delta must be an integer, got {type(delta).__name__}",
                details={"delta": repr(delta)},
            )
        return delta

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get(self, key: str) -> LookupResult:
        """
        Look up a single key.

        Returns:
            LookupResult(value, found, token); a miss yields found=False
        """
        key = self._normalize_key(key)
        if not self._options.readable:
            return LookupResult()

        result = self._internal_get(key)
        logger.debug(
            "Cache %s for key '%s'",
            "hit" if result.found else "miss",
            key,
            extra={"key": key, "namespace": self._options.namespace},
        )
        return result

    def get_many(self, keys: Iterable[str]) -> dict[str, Any]:
        """Return a mapping of the found keys to their values."""
        normalized = self._normalize_keys(keys)
        if not normalized or not self._options.readable:
            return {}
        return self._internal_get_many(normalized)

    def has(self, key: str) -> bool:
        key = self._normalize_key(key)
        if not self._options.readable:
            return False
        return self._internal_has(key)

    def has_many(self, keys: Iterable[str]) -> list[str]:
        """Return the keys that are present."""
        normalized = self._normalize_keys(keys)
        if not normalized or not self._options.readable:
            return []
        return self._internal_has_many(normalized)

    def get_metadata(self, key: str) -> dict[str, Any] | None:
        """
        Return the metadata of a stored item.

        Returns:
            Metadata mapping, or None if the key is not present
        """
        key = self._normalize_key(key)
        if not self._options.readable:
            return None
        return self._internal_get_metadata(key)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any) -> bool:
        key = self._normalize_key(key)
        if not self._options.writable:
            return False

        stored = self._internal_set(key, value)
        logger.debug("Stored key '%s'", key, extra={"key": key, "namespace": self._options.namespace})
        return stored

    def set_many(self, items: Mapping[str, Any]) -> list[str]:
        """
        Store several items.

        Returns:
            Keys that were not stored
        """
        normalized = self._normalize_items(items)
        if not normalized:
            return []
        if not self._options.writable:
            return list(normalized)
        return self._internal_set_many(normalized)

    def add(self, key: str, value: Any) -> bool:
        """Store an item only if the key is not present yet."""
        key = self._normalize_key(key)
        if not self._options.writable:
            return False
        return self._internal_add(key, value)

    def add_many(self, items: Mapping[str, Any]) -> list[str]:
        """
        Add several items.

        Returns:
            Keys that already existed and were skipped
        """
        normalized = self._normalize_items(items)
        if not normalized:
            return []
        if not self._options.writable:
            return list(normalized)
        return self._internal_add_many(normalized)

    def replace(self, key: str, value: Any) -> bool:
        """Overwrite an item only if the key is present."""
        key = self._normalize_key(key)
        if not self._options.writable:
            return False
        return self._internal_replace(key, value)

    def replace_many(self, items: Mapping[str, Any]) -> list[str]:
        """
        Replace several items.

        Returns:
            Keys that were not present and were skipped
        """
        normalized = self._normalize_items(items)
        if not normalized:
            return []
        if not self._options.writable:
            return list(normalized)
        return self._internal_replace_many(normalized)

    def check_and_set(self, token: Any, key: str, value: Any) -> bool:
        """
        Store ``value`` only if the item still holds the value ``token``.

        ``token`` is the one returned by ``get()``.
        """
        key = self._normalize_key(key)
        if not self._options.writable:
            return False
        return self._internal_check_and_set(token, key, value)

    def remove(self, key: str) -> bool:
        key = self._normalize_key(key)
        if not self._options.writable:
            return False

        removed = self._internal_remove(key)
        logger.debug(
            "Removed key '%s'" if removed else "Key '%s' not present, nothing removed",
            key,
            extra={"key": key, "namespace": self._options.namespace},
        )
        return removed

    def remove_many(self, keys: Iterable[str]) -> list[str]:
        """
        Remove several items.

        Returns:
            Keys that were not present
        """
        normalized = self._normalize_keys(keys)
        if not normalized:
            return []
        if not self._options.writable:
            return normalized
        return self._internal_remove_many(normalized)

    def increment(self, key: str, delta: int = 1) -> int | float | None:
        """
        Add ``delta`` to a stored number.

        An absent key is initialized to ``delta``.

        Returns:
            The new value, or None if the adapter is not writable
        """
        key = self._normalize_key(key)
        delta = self._check_delta(delta)
        if not self._options.writable:
            return None
        return self._internal_increment_many({key: delta})[key]

    def increment_many(self, items: Mapping[str, int]) -> dict[str, int | float]:
        """Increment several items, returning their new values."""
        normalized = {key: self._check_delta(delta) for key, delta in self._normalize_items(items).items()}
        if not normalized or not self._options.writable:
            return {}
        return self._internal_increment_many(normalized)

    def decrement(self, key: str, delta: int = 1) -> int | float | None:
        """
        Subtract ``delta`` from a stored number.

        An absent key is initialized to ``-delta``.

        Returns:
            The new value, or None if the adapter is not writable
        """
        key = self._normalize_key(key)
        delta = self._check_delta(delta)
        if not self._options.writable:
            return None
        return self._internal_increment_many({key: -delta})[key]

    def decrement_many(self, items: Mapping[str, int]) -> dict[str, int | float]:
        """Decrement several items, returning their new values."""
        normalized = {key: -self._check_delta(delta) for key, delta in self._normalize_items(items).items()}
        if not normalized or not self._options.writable:
            return {}
        return self._internal_increment_many(normalized)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_capabilities(self) -> Capabilities:
        """Return the capability descriptor, building it on first use."""
        if self._capabilities is None:
            self._capabilities = self._internal_get_capabilities()
        return self._capabilities

    def reset_capabilities(self) -> None:
        """Drop the cached capability descriptor."""
        self._capabilities = None

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _internal_get(self, key: str) -> LookupResult:
        pass

    @abstractmethod
    def _internal_get_many(self, keys: list[str]) -> dict[str, Any]:
        pass

    @abstractmethod
    def _internal_has(self, key: str) -> bool:
        pass

    @abstractmethod
    def _internal_has_many(self, keys: list[str]) -> list[str]:
        pass

    @abstractmethod
    def _internal_get_metadata(self, key: str) -> dict[str, Any] | None:
        pass

    @abstractmethod
    def _internal_set(self, key: str, value: Any) -> bool:
        pass

    @abstractmethod
    def _internal_set_many(self, items: dict[str, Any]) -> list[str]:
        pass

    @abstractmethod
    def _internal_add(self, key: str, value: Any) -> bool:
        pass

    @abstractmethod
    def _internal_add_many(self, items: dict[str, Any]) -> list[str]:
        pass

    @abstractmethod
    def _internal_replace(self, key: str, value: Any) -> bool:
        pass

    @abstractmethod
    def _internal_replace_many(self, items: dict[str, Any]) -> list[str]:
        pass

    @abstractmethod
    def _internal_check_and_set(self, token: Any, key: str, value: Any) -> bool:
        pass

    @abstractmethod
    def _internal_remove(self, key: str) -> bool:
        pass

    @abstractmethod
    def _internal_remove_many(self, keys: list[str]) -> list[str]:
        pass

    @abstractmethod
    def _internal_increment_many(self, deltas: dict[str, int]) -> dict[str, int | float]:
        """Apply signed deltas; absent keys are initialized to their delta."""
        pass

    @abstractmethod
    def _internal_get_capabilities(self) -> Capabilities:
        pass
