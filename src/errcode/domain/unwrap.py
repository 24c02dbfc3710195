# src/errcode/domain/unwrap.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Cause-chain search for structured errors.

Summary:
    Errors travel upward wrapped in contextual exceptions
    (``raise ServiceError(...) from exc`` or :func:`wrap`). At the boundary,
    :func:`unwrap` and :func:`hard_unwrap` walk the explicit ``__cause__``
    chain and recover the first :class:`~errcode.domain.error.Error` found.

Design:
    * Only ``__cause__`` is followed. Implicit ``__context__`` ("during
      handling of the above exception...") is not a wrapping relationship.
    * The walk stops at the outermost structured error, not the root cause.
    * Cycles and chains longer than ``max_depth`` end the walk as "not found".

Layer:
    domain
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Final, overload

from errcode.domain.error import Error

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "WrappedError",
    "hard_unwrap",
    "iter_chain",
    "unwrap",
    "wrap",
]

DEFAULT_MAX_DEPTH: Final[int] = 1024


class WrappedError(Exception):
    """Exception adding contextual text in front of the error it wraps.

    ``str(wrap(err, "repo:"))`` reads ``"repo: <err>"``, so nested wraps
    produce a readable trail such as ``"service: repo: 4 - Invalid username"``.
    """

    def __init__(self, context: str, cause: BaseException) -> None:
        super().__init__(context, cause)
        self.context = context
        self._cause = cause
        self.__cause__ = cause

    def unwrap(self) -> BaseException:
        """Return the wrapped error."""
        return self._cause

    def __str__(self) -> str:
        if not self.context:
            return str(self._cause)
        return f"{self.context} {self._cause}"


def wrap(err: BaseException, context: str) -> WrappedError:
    """Wrap ``err`` with contextual text, keeping it reachable via ``__cause__``."""
    return WrappedError(context, err)


def iter_chain(
    err: BaseException | None, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> Iterator[BaseException]:
    """Yield ``err`` and its explicit causes, outermost first.

    Args:
        err: Starting exception; ``None`` yields nothing.
        max_depth: Maximum number of links to yield.

    Raises:
        ValueError: If ``max_depth`` is less than 1.
    """
    if max_depth < 1:
        raise ValueError("max_depth must be >= 1")

    seen: set[int] = set()
    current = err
    while current is not None and len(seen) < max_depth and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


def hard_unwrap(
    err: BaseException | None, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> tuple[Error | None, bool]:
    """Find the first structured error in the cause chain.

    Args:
        err: Exception to inspect.
        max_depth: Maximum number of chain links to inspect.

    Returns:
        ``(error, True)`` when a structured error is found, else ``(None, False)``.
    """
    for link in iter_chain(err, max_depth=max_depth):
        if isinstance(link, Error):
            return link, True
    return None, False


@overload
def unwrap(err: BaseException, *, max_depth: int = ...) -> BaseException: ...


@overload
def unwrap(err: None, *, max_depth: int = ...) -> None: ...


def unwrap(
    err: BaseException | None, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> BaseException | None:
    """Return the first structured error in the cause chain, else ``err`` unchanged."""
    found, ok = hard_unwrap(err, max_depth=max_depth)
    if ok:
        return found
    return err
