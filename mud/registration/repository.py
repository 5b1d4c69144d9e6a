"""
Registration Repository

Persists registrations to the relational store (registrations table).
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol
from uuid import UUID

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mud.db.client import get_db_session
from mud.db.models import RegistrationRecord
from mud.kernel.errors import StorageError
from mud.registration.model import Registration

logger = structlog.get_logger()

DEFAULT_PAGE_SIZE = 1000

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class RegistrationRepository(Protocol):
    async def store(self, registration: Registration) -> Registration:
        """Insert or update a registration and return the persisted value."""
        ...

    async def find(self, registration_id: UUID) -> Registration | None:
        """Return the registration with this id, or None when absent."""
        ...

    async def delete(self, registration_id: UUID) -> None:
        """Remove the registration with this id. Absent ids are a no-op."""
        ...

    async def find_all(self) -> list[Registration]:
        """Return every stored registration."""
        ...


def _to_entity(row: RegistrationRecord) -> Registration:
    return Registration(
        id=row.id,
        name=row.name,
        email=row.email,
        password=bytes(row.password),
        timezone=row.timezone,
        short_bio=row.short_bio or "",
        validated=bool(row.validated),
    )


def _storage_failure(action: str, exc: SQLAlchemyError) -> StorageError:
    """Log the driver error server-side and return a StorageError safe to render.

    Driver messages carry the SQL statement and bound parameters, so they stay
    on `__cause__` and in the server log; the public message names the action.
    """
    logger.exception("Registration storage failed", action=action, error_type=type(exc).__name__)
    return StorageError(message=f"{action} failed", meta={"error_type": type(exc).__name__})


def _to_record(registration: Registration) -> RegistrationRecord:
    return RegistrationRecord(
        id=registration.id,
        name=registration.name,
        email=registration.email,
        password=registration.password,
        timezone=registration.timezone,
        short_bio=registration.short_bio,
        validated=registration.validated,
    )


class SqlRegistrationRepository:
    """Database-backed registration storage."""

    def __init__(
        self,
        session_factory: SessionFactory = get_db_session,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._session_factory = session_factory
        self._page_size = page_size

    async def store(self, registration: Registration) -> Registration:
        try:
            async with self._session_factory() as session:
                row = await session.merge(_to_record(registration))
                await session.flush()
                return _to_entity(row)
        except SQLAlchemyError as exc:
            raise _storage_failure(f"store registration {registration.id}", exc) from exc

    async def find(self, registration_id: UUID) -> Registration | None:
        try:
            async with self._session_factory() as session:
                row = await session.get(RegistrationRecord, registration_id)
                return _to_entity(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise _storage_failure(f"find registration {registration_id}", exc) from exc

    async def delete(self, registration_id: UUID) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(
                    delete(RegistrationRecord).where(RegistrationRecord.id == registration_id)
                )
        except SQLAlchemyError as exc:
            raise _storage_failure(f"delete registration {registration_id}", exc) from exc

    async def find_all(self) -> list[Registration]:
        """Scan the table page by page until a short page marks the end."""
        registrations: list[Registration] = []
        offset = 0
        try:
            async with self._session_factory() as session:
                while True:
                    result = await session.execute(
                        select(RegistrationRecord)
                        .order_by(RegistrationRecord.id)
                        .limit(self._page_size)
                        .offset(offset)
                    )
                    page = result.scalars().all()
                    registrations.extend(_to_entity(row) for row in page)
                    if len(page) < self._page_size:
                        break
                    offset += len(page)
        except SQLAlchemyError as exc:
            raise _storage_failure(f"list registrations at offset {offset}", exc) from exc

        logger.debug("Registrations scanned", count=len(registrations), pages=offset // self._page_size + 1)
        return registrations
