"""
Registration Service

Business rules for account registration: required fields, defaults and
partial-update semantics. Persistence is delegated to a RegistrationRepository;
nothing is cached between calls.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Protocol
from uuid import UUID

from mud.kernel.ids import is_nil_id, new_registration_id
from mud.registration.errors import InvalidArgument, RegistrationNotFound
from mud.registration.model import DEFAULT_TIMEZONE, Registration
from mud.registration.repository import RegistrationRepository


class RegistrationService(Protocol):
    async def new_registration(
        self,
        name: str,
        password: bytes,
        email: str,
        short_bio: str = "",
        timezone: str = "",
    ) -> Registration:
        """Register a new account."""
        ...

    async def edit_registration(
        self,
        registration_id: UUID | None,
        name: str | None = None,
        password: bytes | None = None,
        email: str | None = None,
        short_bio: str | None = None,
        timezone: str | None = None,
        validated: bool | None = None,
    ) -> Registration:
        """Edit an existing account; only supplied values are applied."""
        ...

    async def delete_registration(self, registration_id: UUID | None) -> None:
        """Remove an existing account."""
        ...

    async def find_by_id(self, registration_id: UUID) -> Registration | None:
        ...

    async def all_registrations(self) -> list[Registration]:
        ...


class BasicRegistrationService:
    def __init__(
        self,
        repository: RegistrationRepository,
        *,
        new_id: Callable[[], UUID] = new_registration_id,
    ) -> None:
        self._repository = repository
        self._new_id = new_id

    async def new_registration(
        self,
        name: str,
        password: bytes,
        email: str,
        short_bio: str = "",
        timezone: str = "",
    ) -> Registration:
        required = (("name", name), ("password", password), ("email", email))
        missing = [field for field, value in required if not value]
        if missing:
            raise InvalidArgument("name, password and email are required", meta={"missing": missing})

        registration = Registration(
            id=self._new_id(),
            name=name,
            email=email,
            password=bytes(password),
            timezone=timezone or DEFAULT_TIMEZONE,
            short_bio=short_bio or "",
            validated=False,
        )
        return await self._repository.store(registration)

    async def edit_registration(
        self,
        registration_id: UUID | None,
        name: str | None = None,
        password: bytes | None = None,
        email: str | None = None,
        short_bio: str | None = None,
        timezone: str | None = None,
        validated: bool | None = None,
    ) -> Registration:
        if is_nil_id(registration_id):
            raise InvalidArgument("must provide a UUID")

        existing = await self._repository.find(registration_id)
        if existing is None:
            raise RegistrationNotFound(
                f"for id {registration_id}", meta={"id": str(registration_id)}
            )

        # Empty strings/bytes count as "not supplied"; validated is applied
        # whenever it is given so that it can be cleared again.
        changes: dict[str, Any] = {}
        if name:
            changes["name"] = name
        if password:
            changes["password"] = bytes(password)
        if email:
            changes["email"] = email
        if short_bio:
            changes["short_bio"] = short_bio
        if timezone:
            changes["timezone"] = timezone
        if validated is not None:
            changes["validated"] = validated

        return await self._repository.store(replace(existing, **changes))

    async def delete_registration(self, registration_id: UUID | None) -> None:
        if is_nil_id(registration_id):
            raise InvalidArgument("must provide a UUID")
        await self._repository.delete(registration_id)

    async def find_by_id(self, registration_id: UUID) -> Registration | None:
        return await self._repository.find(registration_id)

    async def all_registrations(self) -> list[Registration]:
        return await self._repository.find_all()
