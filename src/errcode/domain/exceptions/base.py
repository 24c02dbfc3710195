# src/errcode/domain/exceptions/base.py
# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Base Library Exceptions.

Summary:
    Canonical base class for failures raised by the errcode machinery itself
    (registry misuse, template mismatches). These are distinct from the
    structured :class:`errcode.domain.error.Error` values that applications
    define and raise.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any


class ErrcodeError(Exception):
    """Base class for all errcode library exceptions.

    Attributes:
        code:
            Stable, machine-readable error code for the failure kind.
        details:
            Optional machine-readable diagnostic payload.
    """

    code: str = "ERRCODE_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        """Initialize an ErrcodeError instance.

        Args:
            message:
                Human-readable description of the failure.
            details:
                Optional structured diagnostic payload.

        """
        super().__init__(message)
        self.details: dict[str, Any] = details or {}
