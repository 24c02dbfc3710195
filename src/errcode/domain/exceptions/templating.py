# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Message Template Exceptions.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from errcode.domain.exceptions.base import ErrcodeError


class TemplateArgumentError(ErrcodeError):
    """Template verbs and supplied arguments do not line up (strict rendering only).

    Attributes:
        code: Stable, machine-readable error code.
    """

    code = "TEMPLATE_ARGUMENT_MISMATCH"
