"""
Session Cache — Adapter Options

Runtime options of a session cache adapter: where its data lives (namespace
and container) and which operations it accepts.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..session.container import SessionContainer


class SessionCacheOptions(BaseModel):
    """Options of a SessionCacheBackend."""

    namespace: str = Field(default="session_cache", description="Namespace the cache blob is stored under")
    container: Any = Field(default=None, description="Backing SessionContainer (None = not configured)")
    readable: bool = Field(default=True, description="Allow reads from the cache")
    writable: bool = Field(default=True, description="Allow writes to the cache")
    key_pattern: str | None = Field(default=None, description="Regular expression every key must match")

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("container")
    @classmethod
    def validate_container(cls, v: Any) -> Any:
        """Ensure container implements the SessionContainer interface."""
        if v is not None and not isinstance(v, SessionContainer):
            raise ValueError(f"container must implement SessionContainer, got {type(v).__name__}")
        return v

    @field_validator("key_pattern")
    @classmethod
    def validate_key_pattern(cls, v: str | None) -> str | None:
        """Ensure key_pattern compiles as a regular expression."""
        if v is None or v == "":
            return None
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"key_pattern is not a valid regular expression: {e}") from e
        return v
