"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for the workflow policies,
the HTTP boundary and logging.

Configuration can be overridden via environment variables:
- ORDERS_WORKFLOW_TRANSITION_MODE=strict
- ORDERS_WORKFLOW_TRANSACTIONAL_CREATE=true
- ORDERS_API_PORT=8080
- ORDERS_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError


class WorkflowConfig(BaseSettings):
    """Order workflow policies.

    Environment variables prefixed with ORDERS_WORKFLOW_.

    Attributes:
        transition_mode: "permissive" lets approve/decline overwrite any
            status; "strict" only allows leaving PENDING.
        transactional_create: Run the order insert and all cargo inserts
            in one storage transaction.
        concurrent_location_resolution: Resolve the two route endpoints
            in parallel.
    """

    model_config = SettingsConfigDict(env_prefix="ORDERS_WORKFLOW_")

    transition_mode: Literal["permissive", "strict"] = "permissive"
    transactional_create: bool = False
    concurrent_location_resolution: bool = False


class ApiConfig(BaseSettings):
    """HTTP boundary configuration.

    Environment variables prefixed with ORDERS_API_.
    """

    model_config = SettingsConfigDict(env_prefix="ORDERS_API_")

    title: str = "Transport Orders API"
    host: str = "127.0.0.1"
    port: int = 8000


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with ORDERS_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ORDERS_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.workflow.transition_mode)

    Environment variables prefixed with ORDERS_.
    """

    model_config = SettingsConfigDict(env_prefix="ORDERS_")

    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()


def configure_logging(config: ObservabilityConfig) -> None:
    """Apply the logging level and format to the root logger.

    Raises:
        ConfigurationError: If the level is not a logging level name.
    """
    level = config.level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(
            f"Unknown log level {config.level!r}", setting_name="ORDERS_LOG_LEVEL"
        )
    logging.basicConfig(level=level, format=config.format)
