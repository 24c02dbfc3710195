# tests/unit/dependencies/test_bootstrap.py
from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from fastapi import FastAPI

from errcode.config.settings import Settings
from errcode.dependencies.core.bootstrap import BootstrapState, bootstrap
from errcode.domain.error import Error
from errcode.domain.exceptions.registry import RegistrySealedError
from errcode.domain.registry import CodeRegistry


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """bootstrap() configures the root logger; put it back after each test."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.mark.anyio
async def test_bootstrap_seals_registry(registry: CodeRegistry) -> None:
    Error(50, 400, "Bad Request", registry=registry)
    app = FastAPI()
    settings = Settings()

    async with bootstrap(app, settings=settings, registry=registry) as state:
        assert isinstance(state, BootstrapState)
        assert state.registry is registry
        assert state.settings is settings
        assert app.state.errcode_settings is settings
        assert registry.sealed is True
        with pytest.raises(RegistrySealedError):
            Error(51, 400, "Late definition", registry=registry)


@pytest.mark.anyio
async def test_bootstrap_leaves_registry_open_when_disabled(registry: CodeRegistry) -> None:
    settings = Settings(ERRCODE_SEAL_ON_STARTUP=False)  # type: ignore[call-arg]

    async with bootstrap(FastAPI(), settings=settings, registry=registry):
        Error(52, 400, "Late definition", registry=registry)

    assert registry.sealed is False
    assert 52 in registry


@pytest.mark.anyio
async def test_bootstrap_applies_configured_log_level(
    registry: CodeRegistry, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings(LOG_LEVEL="warning")  # type: ignore[call-arg]
    logging.getLogger().setLevel(logging.INFO)

    async with bootstrap(FastAPI(), settings=settings, registry=registry):
        assert logging.getLogger().level == logging.WARNING
