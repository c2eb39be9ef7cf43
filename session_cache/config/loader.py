"""
Session Cache — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the runtime.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import SessionCacheConfig

logger = logging.getLogger(__name__)

_config_instance: SessionCacheConfig | None = None


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> SessionCacheConfig:
    """
    Load configuration from environment variables and .env file.

    Logging is left alone; applications that want the JSON handler call
    ``setup_logging(config.log_level)`` themselves.

    Args:
        env_file: Path to .env file (default: .env in working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated SessionCacheConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info("Loading environment from %s", env_path)
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                "Failed to load .env file from %s: %s",
                env_path,
                e,
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    config_dict = {
        "environment": os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "cache": {
            "namespace": os.getenv("CACHE_NAMESPACE", "session_cache"),
            "container_name": os.getenv("CACHE_CONTAINER_NAME", "Default"),
            "readable": _env_flag("CACHE_READABLE", "true"),
            "writable": _env_flag("CACHE_WRITABLE", "true"),
            "key_pattern": os.getenv("CACHE_KEY_PATTERN") or None,
        },
    }

    try:
        _config_instance = SessionCacheConfig(**config_dict)  # type: ignore[arg-type]
    except ValidationError as e:
        logger.error(
            "Configuration validation failed: %s",
            e,
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e

    logger.info(
        "Configuration loaded successfully (environment: %s)",
        _config_instance.environment,
        extra={"environment": _config_instance.environment, "cache_namespace": _config_instance.cache.namespace},
    )
    return _config_instance


def get_config() -> SessionCacheConfig:
    """
    Get the current configuration instance.

    Loads it from the environment on first access.
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> SessionCacheConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded SessionCacheConfig instance
    """
    return load_config(env_file=env_file, reload=True)
