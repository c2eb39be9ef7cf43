"""
Session Cache — Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import Generator
from typing import Any

import pytest

from session_cache.cache.backends.session import SessionCacheBackend
from session_cache.cache.options import SessionCacheOptions
from session_cache.session.container import MemorySessionContainer

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"


@pytest.fixture
def session_storage() -> dict[str, Any]:
    """Plain dict standing in for a web framework's session mapping."""
    return {}


@pytest.fixture
def container(session_storage: dict[str, Any]) -> MemorySessionContainer:
    """Session container writing into session_storage."""
    return MemorySessionContainer(name="Default", storage=session_storage)


@pytest.fixture
def cache(container: MemorySessionContainer) -> SessionCacheBackend:
    """Session cache backend in namespace 'test'."""
    return SessionCacheBackend(SessionCacheOptions(namespace="test", container=container))


@pytest.fixture
def mock_env_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for cache configuration."""
    monkeypatch.setenv("CACHE_NAMESPACE", "env_ns")
    monkeypatch.setenv("CACHE_CONTAINER_NAME", "EnvContainer")
    monkeypatch.setenv("CACHE_READABLE", "true")
    monkeypatch.setenv("CACHE_WRITABLE", "true")
    monkeypatch.delenv("CACHE_KEY_PATTERN", raising=False)


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for cache testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "simple_none": None,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_cache_factory() -> Generator[None, None, None]:
    """Reset cache factory after each test to prevent state leakage."""
    yield
    from session_cache.cache.factory import reset_cache_factory

    reset_cache_factory()
