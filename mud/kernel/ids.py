from __future__ import annotations

from uuid import UUID, uuid4


NIL_ID = UUID(int=0)


def new_registration_id() -> UUID:
    """Generate a fresh registration identifier (UUIDv4)."""
    return uuid4()


def is_nil_id(value: UUID | None) -> bool:
    """Return True for a missing or all-zero identifier."""
    return value is None or value == NIL_ID


def parse_id(value: str) -> UUID:
    """Parse a textual UUID, raising ValueError when it is not one."""
    return UUID(value.strip())
