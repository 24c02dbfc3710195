# src/errcode/domain/registry.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Error code registry.

Purpose:
    Track which numeric error codes have been allocated so that no two
    structured error definitions share a code.

Layer:
    domain

Notes:
    - Registration is expected to happen while modules are imported, before
      any concurrent request handling starts. The registry carries no lock.
    - :meth:`CodeRegistry.seal` turns that expectation into an enforced
      contract: once sealed, every further registration fails.
    - The registry is strictly additive; there is no removal API.
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache

from errcode.domain.exceptions.registry import DuplicateCodeError, RegistrySealedError

__all__ = ["CodeRegistry", "default_registry"]


class CodeRegistry:
    """Set of allocated error codes with duplicate rejection.

    The registry keeps only the codes, never the definitions that claimed them.
    """

    def __init__(self) -> None:
        self._codes: set[int] = set()
        self._sealed = False

    def register(self, code: int) -> None:
        """Allocate ``code`` in this registry.

        Args:
            code: Numeric error code that must be unique within the registry.

        Raises:
            TypeError: If ``code`` is not an integer.
            RegistrySealedError: If :meth:`seal` has been called.
            DuplicateCodeError: If ``code`` is already allocated.
        """
        if isinstance(code, bool) or not isinstance(code, int):
            raise TypeError(f"errcode: code must be an int, got {type(code).__name__}")
        if self._sealed:
            raise RegistrySealedError(code)
        if code in self._codes:
            raise DuplicateCodeError(code)
        self._codes.add(code)

    def seal(self) -> None:
        """Refuse all further registrations. Calling it again is a no-op."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        """Whether the registry refuses new registrations."""
        return self._sealed

    def __contains__(self, code: object) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._codes))

    def __repr__(self) -> str:
        return f"CodeRegistry(codes={len(self._codes)}, sealed={self._sealed})"


@lru_cache(maxsize=1)
def default_registry() -> CodeRegistry:
    """Return the process-wide registry used when none is injected."""
    return CodeRegistry()
