# Copyright (c) Errcode.
# SPDX-License-Identifier: MIT
"""Code Registry Exceptions.

Synopsis:
    Configuration-time failures raised while registering error codes. Both
    indicate a programming error that is discoverable at import/startup and
    are not meant to be caught by request-handling code.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from errcode.domain.exceptions.base import ErrcodeError


class DuplicateCodeError(ErrcodeError):
    """A code was registered twice in the same registry.

    Attributes:
        code: Stable, machine-readable error code.
        duplicate: The offending numeric error code.
    """

    code = "DUPLICATE_CODE"

    def __init__(self, duplicate: int) -> None:
        super().__init__(f"errcode: duplicate code {duplicate}", details={"code": duplicate})
        self.duplicate = duplicate


class RegistrySealedError(ErrcodeError):
    """Registration was attempted after the registry was sealed.

    Attributes:
        code: Stable, machine-readable error code.
        rejected: The numeric error code that was refused.
    """

    code = "REGISTRY_SEALED"

    def __init__(self, rejected: int) -> None:
        super().__init__(
            f"errcode: registry is sealed, cannot register code {rejected}",
            details={"code": rejected},
        )
        self.rejected = rejected
