# src/errcode/config/settings.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Errcode Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated configuration for the parts of errcode that sit at the
    application boundary: the FastAPI error handlers and the startup
    bootstrap. The domain layer never reads settings; values are passed in.

Design:
    - Pydantic v2 BaseSettings with `extra='forbid'`.
    - Explicit field declarations with constrained types and ranges.
    - Environment enumeration for behavior toggles.
    - Singleton accessor `get_settings()` with LRU cache.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed errcode configuration."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )

    max_unwrap_depth: int = Field(
        default=1024,
        ge=1,
        le=100_000,
        description="Maximum number of cause-chain links inspected when unwrapping.",
        validation_alias="ERRCODE_MAX_UNWRAP_DEPTH",
    )

    seal_on_startup: bool = Field(
        default=True,
        description="Seal the code registry when the application starts serving.",
        validation_alias="ERRCODE_SEAL_ON_STARTUP",
    )

    expose_internal_messages: bool = Field(
        default=False,
        description=(
            "Include the text of unhandled exceptions in 500 envelopes. "
            "Not allowed in production."
        ),
        validation_alias="ERRCODE_EXPOSE_INTERNAL_MESSAGES",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level applied by bootstrap() through configure_root_logging().",
        validation_alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        extra="forbid",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _validate_exposure(self) -> Settings:
        """Reject leaking internal exception text in production.

        Returns:
            Settings: The validated settings instance.

        Raises:
            ValueError: If internal messages are exposed in production.
        """
        if self.expose_internal_messages and self.environment is Environment.PRODUCTION:
            raise ValueError(
                "ERRCODE_EXPOSE_INTERNAL_MESSAGES must be false when ENVIRONMENT=production.",
            )
        return self

    @model_validator(mode="after")
    def _normalize_log_level(self) -> Settings:
        level = self.log_level.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL {self.log_level!r}.")
        self.log_level = level
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Returns:
        Settings: Validated settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
        logger.info(
            "Settings initialized",
            extra={
                "extra": {
                    "environment": settings.environment.value,
                    "max_unwrap_depth": settings.max_unwrap_depth,
                    "seal_on_startup": settings.seal_on_startup,
                    "expose_internal_messages": settings.expose_internal_messages,
                    "log_level": settings.log_level,
                }
            },
        )
        return settings
    except ValidationError as exc:
        logger.exception("Invalid errcode configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
