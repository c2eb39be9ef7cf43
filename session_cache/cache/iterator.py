"""
Session Cache — Key List Iterator

Iterates over a snapshot of the keys stored in a cache namespace.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .interface import StorageInterface


class IteratorMode(str, Enum):
    """What a KeyListIterator yields per key."""

    KEY = "key"
    VALUE = "value"
    METADATA = "metadata"


class KeyListIterator(Iterator[Any]):
    """
    Iterator over a fixed list of keys.

    The key list is captured when the iterator is created; later writes to the
    cache don't change which keys are visited. In VALUE and METADATA mode each
    item is looked up through the storage when it is reached, so a key removed
    in the meantime yields None.

    The iterator is single-pass. Call ``iterate()`` on the storage again for a
    fresh snapshot.
    """

    def __init__(
        self,
        storage: StorageInterface,
        keys: Sequence[str],
        mode: IteratorMode | str = IteratorMode.KEY,
    ):
        self.storage = storage
        self.mode = IteratorMode(mode)
        self._keys = list(keys)
        self._position = 0

    def set_mode(self, mode: IteratorMode | str) -> KeyListIterator:
        self.mode = IteratorMode(mode)
        return self

    def __iter__(self) -> KeyListIterator:
        return self

    def __next__(self) -> Any:
        if self._position >= len(self._keys):
            raise StopIteration

        key = self._keys[self._position]
        self._position += 1

        if self.mode is IteratorMode.VALUE:
            return self.storage.get(key).value
        if self.mode is IteratorMode.METADATA:
            return self.storage.get_metadata(key)
        return key

    def __len__(self) -> int:
        return len(self._keys)
