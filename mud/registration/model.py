from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


DEFAULT_TIMEZONE = "UTC"


@dataclass(frozen=True, slots=True)
class Registration:
    """A registered account as the service sees it.

    `password` is opaque: callers hand in an already-hashed/encoded value.
    """

    id: UUID
    name: str
    email: str
    password: bytes
    timezone: str = DEFAULT_TIMEZONE
    short_bio: str = ""
    validated: bool = False
