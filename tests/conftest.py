# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator

import pytest

from errcode.config.settings import get_settings
from errcode.domain.registry import CodeRegistry


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio (not trio)."""
    return "asyncio"


@pytest.fixture
def registry() -> CodeRegistry:
    """Fresh registry so tests never allocate codes in the process-wide one."""
    return CodeRegistry()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Make get_settings() re-read the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
