"""
Session Cache — Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All configuration is defined here and validated when loaded.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CacheConfig(BaseModel):
    """Cache configuration."""

    namespace: str = Field(default="session_cache", description="Namespace the cache blob is stored under")
    container_name: str = Field(default="Default", description="Session container partition name")
    readable: bool = Field(default=True, description="Allow reads from the cache")
    writable: bool = Field(default=True, description="Allow writes to the cache")
    key_pattern: str | None = Field(default=None, description="Regular expression every key must match")

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


class SessionCacheConfig(BaseModel):
    """Root configuration for the session cache."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    cache: CacheConfig = Field(default_factory=CacheConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
