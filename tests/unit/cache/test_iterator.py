"""
Session Cache — Key List Iterator Tests
"""

import pytest

from session_cache.cache.backends.session import SessionCacheBackend
from session_cache.cache.iterator import IteratorMode, KeyListIterator


class TestKeyListIterator:
    @pytest.fixture
    def populated(self, cache: SessionCacheBackend) -> SessionCacheBackend:
        cache.set_many({"a": 1, "b": 2, "c": 3})
        return cache

    def test_keys_mode_default(self, populated: SessionCacheBackend) -> None:
        iterator = populated.iterate()

        assert isinstance(iterator, KeyListIterator)
        assert iterator.mode is IteratorMode.KEY
        assert len(iterator) == 3
        assert sorted(iterator) == ["a", "b", "c"]

    def test_single_pass(self, populated: SessionCacheBackend) -> None:
        iterator = populated.iterate()
        assert len(list(iterator)) == 3
        assert list(iterator) == []
        assert len(list(populated.iterate())) == 3

    def test_value_mode(self, populated: SessionCacheBackend) -> None:
        iterator = populated.iterate().set_mode(IteratorMode.VALUE)
        assert sorted(iterator) == [1, 2, 3]

    def test_value_mode_removed_key(self, populated: SessionCacheBackend) -> None:
        iterator = KeyListIterator(populated, ["a", "b"], mode="value")
        populated.remove("b")
        assert list(iterator) == [1, None]

    def test_metadata_mode(self, populated: SessionCacheBackend) -> None:
        iterator = KeyListIterator(populated, ["a", "gone"], mode=IteratorMode.METADATA)
        assert list(iterator) == [{}, None]

    def test_invalid_mode(self, populated: SessionCacheBackend) -> None:
        with pytest.raises(ValueError):
            populated.iterate().set_mode("bogus")
