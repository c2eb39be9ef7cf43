"""
Session Cache — Namespace Resolver Tests
"""

import pytest
from pydantic import ValidationError

from session_cache.cache.capabilities import DATATYPES, Capabilities
from session_cache.cache.namespace import NamespaceResolver
from session_cache.cache.options import SessionCacheOptions
from session_cache.errors import ConfigurationError, ErrorCode, extract_error_code
from session_cache.session.container import MemorySessionContainer


class TestNamespaceResolver:
    def test_resolve(self, container: MemorySessionContainer) -> None:
        resolver = NamespaceResolver(SessionCacheOptions(namespace="ns", container=container))

        namespace, resolved = resolver.resolve()

        assert namespace == "ns"
        assert resolved is container

    def test_resolve_empty_namespace(self, container: MemorySessionContainer) -> None:
        resolver = NamespaceResolver(SessionCacheOptions(namespace="", container=container))
        assert resolver.resolve() == ("", container)

    def test_resolve_without_container(self) -> None:
        resolver = NamespaceResolver(SessionCacheOptions(namespace="ns"))

        with pytest.raises(ConfigurationError, match="No session container configured") as exc_info:
            resolver.resolve()

        assert exc_info.value.details["namespace"] == "ns"
        assert extract_error_code(exc_info.value) is ErrorCode.CONTAINER_MISSING

    def test_resolve_follows_options(self, container: MemorySessionContainer) -> None:
        options = SessionCacheOptions(namespace="before")
        resolver = NamespaceResolver(options)

        options.namespace = "after"
        options.container = container

        assert resolver.resolve() == ("after", container)


class TestCapabilitiesModel:
    def test_defaults(self) -> None:
        caps = Capabilities()
        assert caps.min_ttl == 0
        assert caps.supported_datatypes == {}
        assert all(caps.supports_datatype(name) is False for name in DATATYPES)

    def test_frozen(self) -> None:
        caps = Capabilities(min_ttl=0)
        with pytest.raises(ValidationError):
            caps.min_ttl = 5  # type: ignore[misc]

    def test_string_support_counts_as_supported(self) -> None:
        caps = Capabilities(supported_datatypes={"array": "array", "resource": False})
        assert caps.supports_datatype("array") is True
        assert caps.supports_datatype("resource") is False
        assert caps.supports_datatype("unknown") is False
