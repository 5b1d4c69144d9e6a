"""Database models."""

from mud.db.models.registration import Base, RegistrationRecord

__all__ = [
    "Base",
    "RegistrationRecord",
]
