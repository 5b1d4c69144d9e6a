"""Request metrics around every registration service call."""

from __future__ import annotations

from uuid import UUID

from mud.monitoring.metrics import Metrics
from mud.registration.model import Registration
from mud.registration.service import RegistrationService


class InstrumentingRegistrationService:
    """Counts and times each call, labelled by method, then forwards it unchanged."""

    def __init__(self, service: RegistrationService, metrics: Metrics) -> None:
        self._service = service
        self._metrics = metrics

    async def new_registration(
        self,
        name: str,
        password: bytes,
        email: str,
        short_bio: str = "",
        timezone: str = "",
    ) -> Registration:
        with self._metrics.time_call("new_registration"):
            return await self._service.new_registration(name, password, email, short_bio, timezone)

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
        with self._metrics.time_call("edit_registration"):
            return await self._service.edit_registration(
                registration_id, name, password, email, short_bio, timezone, validated
            )

    async def delete_registration(self, registration_id: UUID | None) -> None:
        with self._metrics.time_call("delete_registration"):
            await self._service.delete_registration(registration_id)

    async def find_by_id(self, registration_id: UUID) -> Registration | None:
        with self._metrics.time_call("find_registration"):
            return await self._service.find_by_id(registration_id)

    async def all_registrations(self) -> list[Registration]:
        with self._metrics.time_call("all_registrations"):
            return await self._service.all_registrations()
