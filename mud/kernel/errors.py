from __future__ import annotations

import re
from typing import Any


_ERROR_CODE_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")


class MudError(Exception):
    """Base typed error for the registration service.

    Goals:
    - Stable `code` for programmatic handling and log correlation.
    - Human-readable `message`, which is the only thing rendered on the wire.
    - `status_code` so the HTTP boundary never has to guess.
    """

    def __init__(
        self,
        *,
        code: str,
        message: str,
        status_code: int = 500,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if not _ERROR_CODE_RE.fullmatch(code):
            raise ValueError(
                "Invalid error code. Expected dot-separated lowercase tokens, "
                f"got: {code!r}"
            )
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = int(status_code)
        self.meta = dict(meta or {})

    def to_public_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class DecodeError(MudError):
    def __init__(
        self,
        *,
        message: str = "Malformed request",
        code: str = "request.decode_error",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, status_code=400, meta=meta)


class StorageError(MudError):
    def __init__(
        self,
        *,
        message: str = "Storage error",
        code: str = "storage.error",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, status_code=500, meta=meta)


def find_mud_error(exc: BaseException | None) -> MudError | None:
    """Return the nearest MudError in an exception's cause/context chain."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, MudError):
            return exc
        seen.add(id(exc))
        exc = exc.__cause__ or exc.__context__
    return None
