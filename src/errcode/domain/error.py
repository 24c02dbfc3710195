# src/errcode/domain/error.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Structured error value.

Summary:
    :class:`Error` is an exception carrying a unique numeric code, an
    HTTP-equivalent status code and a message template. Applications define
    a fixed table of them once, typically as module-level constants, and
    raise clones produced by :meth:`Error.with_args` at call sites.

Design:
    * Construction registers the code; duplicates fail at import time.
    * Values are read-only after construction. :meth:`Error.with_args` and
      ``copy.copy`` return independent clones and never register again.
    * Pickling rebuilds the value from its state, so an error can cross a
      process boundary without registering its code in the receiving process.
    * Raising an exception attaches traceback state to it, so call sites
      raise ``DEFINITION.with_args(...)`` rather than the shared definition.

Typical usage:
    ErrInvalid = Error(4, 400, "Invalid %v")

    raise ErrInvalid.with_args("username")

Layer:
    domain
"""

from __future__ import annotations

import copy
from typing import Any

from errcode.domain.registry import CodeRegistry, default_registry
from errcode.domain.templating import render_template

__all__ = ["Error"]


class Error(Exception):
    """Structured error with a unique code, a status code and a message template.

    Attributes:
        code: Numeric error code, unique within its registry.
        http_status_code: Externally visible status (e.g., HTTP status).
        message_template: Template rendered by :attr:`message`.
        format_args: Arguments bound into the template.
    """

    def __init__(
        self,
        code: int,
        http_status_code: int,
        message_template: str,
        *args: Any,
        registry: CodeRegistry | None = None,
    ) -> None:
        """Register ``code`` and build the definition.

        Args:
            code: Numeric error code; must not be registered yet.
            http_status_code: Status code surfaced to clients.
            message_template: Printf-style template (see :mod:`errcode.domain.templating`).
            *args: Initial template arguments.
            registry: Registry to allocate the code in. Defaults to
                :func:`~errcode.domain.registry.default_registry`.

        Raises:
            DuplicateCodeError: If ``code`` is already registered.
            RegistrySealedError: If the registry no longer accepts codes.
        """
        if registry is None:
            registry = default_registry()
        registry.register(code)

        super().__init__(code, http_status_code, message_template)
        self._code = code
        self._http_status_code = http_status_code
        self._message_template = message_template
        self._format_args: tuple[Any, ...] = args

    @property
    def code(self) -> int:
        return self._code

    @property
    def http_status_code(self) -> int:
        return self._http_status_code

    @property
    def message_template(self) -> str:
        return self._message_template

    @property
    def format_args(self) -> tuple[Any, ...]:
        return self._format_args

    @property
    def message(self) -> str:
        """Rendered message; the raw template when no arguments are bound."""
        return self.render()

    def render(self, *, strict: bool = False) -> str:
        """Render the message, optionally failing on template/argument mismatches.

        Args:
            strict: Raise ``TemplateArgumentError`` instead of emitting markers.

        Returns:
            The rendered message, or the template verbatim if no arguments are bound.
        """
        if not self._format_args:
            return self._message_template
        return render_template(self._message_template, self._format_args, strict=strict)

    def with_args(self, *args: Any) -> Error:
        """Return a clone with ``args`` appended to the bound arguments.

        The receiver is left untouched, so arguments can be accumulated across
        call layers without affecting the shared definition.
        """
        clone = _rebuild(type(self), self.args, self.__dict__)
        clone._format_args = self._format_args + args
        return clone

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild, (type(self), self.args, self.__dict__))

    def __copy__(self) -> Error:
        return self.with_args()

    def __deepcopy__(self, memo: dict[int, Any]) -> Error:
        clone = self.with_args()
        clone._format_args = copy.deepcopy(self._format_args, memo)
        return clone

    def __str__(self) -> str:
        return f"{self._code} - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self._code}, "
            f"http_status_code={self._http_status_code}, "
            f"message_template={self._message_template!r}, "
            f"format_args={self._format_args!r})"
        )


def _rebuild(cls: type[Error], args: tuple[Any, ...], state: dict[str, Any]) -> Error:
    """Recreate an :class:`Error` from its state without registering its code.

    Used for clones and for unpickling. Notes are copied so that adding a note
    to the result never touches the source.
    """
    err = cls.__new__(cls)
    err.__dict__.update(state)
    if "__notes__" in state:
        err.__notes__ = list(state["__notes__"])
    err.args = args
    return err
