# src/errcode/dependencies/core/bootstrap.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Application bootstrap for errcode.

Error definitions are registered while modules are imported. This lifespan
marks the end of that phase: it resolves settings, applies the configured
log level, seals the code registry so no definition can be added while
requests are served, and yields the resolved state to the application.

Usage:
    app = FastAPI(lifespan=bootstrap)
    install_error_handlers(app)
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI

from errcode.config.settings import Settings, get_settings
from errcode.domain.registry import CodeRegistry, default_registry
from errcode.infrastructure.logging.logger import configure_root_logging, get_json_logger

logger = get_json_logger(__name__)


@dataclass
class BootstrapState:
    """State yielded by the bootstrap context manager."""

    settings: Settings
    registry: CodeRegistry


@asynccontextmanager
async def bootstrap(
    app: FastAPI,
    *,
    settings: Settings | None = None,
    registry: CodeRegistry | None = None,
) -> AsyncGenerator[BootstrapState, None]:
    """Close the registration phase and expose the resolved state.

    Args:
        app: FastAPI application; receives ``state.errcode_settings``.
        settings: Settings override; defaults to :func:`get_settings`.
        registry: Registry override; defaults to the process-wide registry.

    Yields:
        BootstrapState: Resolved settings and registry.
    """
    if settings is None:
        settings = get_settings()
    if registry is None:
        registry = default_registry()

    configure_root_logging(settings.log_level)
    app.state.errcode_settings = settings
    if settings.seal_on_startup:
        registry.seal()

    logger.info(
        "bootstrap.start",
        extra={"extra": {"registered_codes": len(registry), "sealed": registry.sealed}},
    )
    try:
        yield BootstrapState(settings=settings, registry=registry)
    finally:
        logger.info("bootstrap.stop")
