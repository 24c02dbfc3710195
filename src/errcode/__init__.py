# src/errcode/__init__.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Registry-backed structured errors with unique codes and status codes.

Typical usage:
    from errcode import Error, unwrap, wrap

    ErrInvalid = Error(4, 400, "Invalid %v")

    try:
        raise wrap(ErrInvalid.with_args("username"), "repo:")
    except Exception as exc:
        structured = unwrap(exc)
"""

from __future__ import annotations

from errcode.domain.error import Error
from errcode.domain.exceptions.base import ErrcodeError
from errcode.domain.exceptions.registry import DuplicateCodeError, RegistrySealedError
from errcode.domain.exceptions.templating import TemplateArgumentError
from errcode.domain.registry import CodeRegistry, default_registry
from errcode.domain.templating import render_template
from errcode.domain.unwrap import (
    DEFAULT_MAX_DEPTH,
    WrappedError,
    hard_unwrap,
    iter_chain,
    unwrap,
    wrap,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "CodeRegistry",
    "DuplicateCodeError",
    "ErrcodeError",
    "Error",
    "RegistrySealedError",
    "TemplateArgumentError",
    "WrappedError",
    "default_registry",
    "hard_unwrap",
    "iter_chain",
    "render_template",
    "unwrap",
    "wrap",
]
