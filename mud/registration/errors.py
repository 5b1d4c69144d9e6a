"""Registration error taxonomy.

A closed set of kinds; each kind fixes the error code, the base message and the
HTTP status the transport renders it with.
"""

from __future__ import annotations

import enum
from typing import Any

from mud.kernel.errors import MudError


class RegistrationErrorKind(enum.Enum):
    INVALID_ARGUMENT = ("registration.invalid_argument", "Invalid Argument", 404)
    REGISTRATION_EXISTS = ("registration.exists", "Registration Already Exists", 406)
    REGISTRATION_NOT_FOUND = ("registration.not_found", "Registration Not Found", 404)

    def __init__(self, code: str, message: str, status_code: int) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code


class RegistrationError(MudError):
    """A registration failure tagged with its kind."""

    kind: RegistrationErrorKind

    def __init__(
        self,
        kind: RegistrationErrorKind,
        detail: str | None = None,
        *,
        meta: dict[str, Any] | None = None,
    ) -> None:
        message = f"{kind.message} - {detail}" if detail else kind.message
        super().__init__(code=kind.code, message=message, status_code=kind.status_code, meta=meta)
        self.kind = kind
        self.detail = detail


class InvalidArgument(RegistrationError):
    def __init__(self, detail: str | None = None, *, meta: dict[str, Any] | None = None) -> None:
        super().__init__(RegistrationErrorKind.INVALID_ARGUMENT, detail, meta=meta)


class RegistrationExists(RegistrationError):
    def __init__(self, detail: str | None = None, *, meta: dict[str, Any] | None = None) -> None:
        super().__init__(RegistrationErrorKind.REGISTRATION_EXISTS, detail, meta=meta)


class RegistrationNotFound(RegistrationError):
    def __init__(self, detail: str | None = None, *, meta: dict[str, Any] | None = None) -> None:
        super().__init__(RegistrationErrorKind.REGISTRATION_NOT_FOUND, detail, meta=meta)
