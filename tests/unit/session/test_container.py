"""
Session Cache — Memory Session Container Tests
"""

from typing import Any

import pytest

from session_cache.errors import ConfigurationError
from session_cache.session.container import MemorySessionContainer, SessionContainer


class TrackingSession(dict):
    """Dict that records top-level assignments, like framework session objects."""

    def __init__(self) -> None:
        super().__init__()
        self.assigned: list[str] = []

    def __setitem__(self, key: str, value: Any) -> None:
        self.assigned.append(key)
        super().__setitem__(key, value)


class TestMemorySessionContainer:
    def test_implements_protocol(self) -> None:
        assert isinstance(MemorySessionContainer(), SessionContainer)

    def test_write_and_read(self) -> None:
        container = MemorySessionContainer()

        assert container.exists("ns") is False
        container.write("ns", {"a": 1})

        assert container.exists("ns") is True
        assert container.read("ns") == {"a": 1}

    def test_read_missing(self) -> None:
        with pytest.raises(KeyError):
            MemorySessionContainer().read("missing")

    def test_read_returns_copy(self) -> None:
        container = MemorySessionContainer()
        container.write("ns", {"a": 1})

        blob = container.read("ns")
        blob["b"] = 2

        assert container.read("ns") == {"a": 1}

    def test_write_stores_copy(self) -> None:
        container = MemorySessionContainer()
        blob = {"a": 1}
        container.write("ns", blob)
        blob["b"] = 2

        assert container.read("ns") == {"a": 1}

    def test_delete(self) -> None:
        container = MemorySessionContainer()
        container.write("ns", {"a": 1})

        container.delete("ns")
        container.delete("ns")

        assert container.exists("ns") is False

    def test_replace_all(self) -> None:
        container = MemorySessionContainer()
        container.write("ns", {"a": 1})

        previous = container.replace_all("ns", {})

        assert previous == {"a": 1}
        assert container.exists("ns") is True
        assert container.read("ns") == {}
        assert container.replace_all("other", {"x": 1}) is None

    def test_partition_in_shared_storage(self) -> None:
        storage: dict[str, Any] = {"unrelated": "kept"}
        first = MemorySessionContainer(name="First", storage=storage)
        second = MemorySessionContainer(name="Second", storage=storage)

        first.write("ns", {"a": 1})
        second.write("ns", {"a": 2})

        assert storage == {
            "unrelated": "kept",
            "First": {"ns": {"a": 1}},
            "Second": {"ns": {"a": 2}},
        }

    def test_writes_reassign_partition(self) -> None:
        session = TrackingSession()
        container = MemorySessionContainer(name="Cache", storage=session)

        container.write("ns", {"a": 1})
        container.replace_all("ns", {})
        container.delete("ns")
        container.delete("ns")

        assert session.assigned == ["Cache", "Cache", "Cache"]

    def test_non_mapping_partition_rejected(self) -> None:
        storage = {"Cache": "garbage"}
        container = MemorySessionContainer(name="Cache", storage=storage)

        with pytest.raises(ConfigurationError, match="not a mapping"):
            container.exists("ns")
        with pytest.raises(ConfigurationError):
            container.write("ns", {"a": 1})

        assert storage == {"Cache": "garbage"}

    def test_blobs_are_copied_in_and_out(self) -> None:
        storage: dict[str, Any] = {}
        container = MemorySessionContainer(name="Cache", storage=storage)
        blob = {"cart": {"items": ["a"]}}

        container.write("ns", blob)
        blob["cart"]["items"].append("b")
        container.read("ns")["cart"]["items"].append("c")

        assert storage == {"Cache": {"ns": {"cart": {"items": ["a"]}}}}

        previous = container.replace_all("ns", {})
        previous["cart"]["items"].append("d")
        assert container.read("ns") == {}
