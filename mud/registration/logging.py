"""Structured call logging for the registration service."""

from __future__ import annotations

import time
from typing import Any
from uuid import UUID

import structlog

from mud.kernel.errors import MudError
from mud.registration.model import Registration
from mud.registration.service import RegistrationService


class LoggingRegistrationService:
    """Emits one log record per call once it finishes or fails.

    Cancellation counts as a failure. Passwords are never logged.
    """

    def __init__(self, service: RegistrationService, logger: Any = None) -> None:
        self._service = service
        self._logger = logger if logger is not None else structlog.get_logger().bind(component="registration")

    def _log(self, method: str, started: float, error: BaseException | None, **fields: Any) -> None:
        elapsed_ms = round((time.perf_counter() - started) * 1000, 3)
        if error is not None:
            if isinstance(error, MudError) and error.meta:
                fields["error_meta"] = error.meta
            self._logger.warning(
                "Registration call failed",
                method=method,
                elapsed_ms=elapsed_ms,
                error=str(error) or type(error).__name__,
                **fields,
            )
        else:
            self._logger.info(
                "Registration call completed",
                method=method,
                elapsed_ms=elapsed_ms,
                error=None,
                **fields,
            )

    async def new_registration(
        self,
        name: str,
        password: bytes,
        email: str,
        short_bio: str = "",
        timezone: str = "",
    ) -> Registration:
        started = time.perf_counter()
        error: BaseException | None = None
        try:
            return await self._service.new_registration(name, password, email, short_bio, timezone)
        except BaseException as exc:
            error = exc
            raise
        finally:
            self._log(
                "new_registration",
                started,
                error,
                username=name,
                email=email,
                short_bio=short_bio,
                timezone=timezone,
            )

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
        started = time.perf_counter()
        error: BaseException | None = None
        try:
            return await self._service.edit_registration(
                registration_id, name, password, email, short_bio, timezone, validated
            )
        except BaseException as exc:
            error = exc
            raise
        finally:
            self._log(
                "edit_registration",
                started,
                error,
                id=str(registration_id) if registration_id is not None else None,
                username=name,
                email=email,
                short_bio=short_bio,
                timezone=timezone,
                validated=validated,
            )

    async def delete_registration(self, registration_id: UUID | None) -> None:
        started = time.perf_counter()
        error: BaseException | None = None
        try:
            await self._service.delete_registration(registration_id)
        except BaseException as exc:
            error = exc
            raise
        finally:
            self._log(
                "delete_registration",
                started,
                error,
                id=str(registration_id) if registration_id is not None else None,
            )

    async def find_by_id(self, registration_id: UUID) -> Registration | None:
        started = time.perf_counter()
        error: BaseException | None = None
        found = False
        try:
            registration = await self._service.find_by_id(registration_id)
            found = registration is not None
            return registration
        except BaseException as exc:
            error = exc
            raise
        finally:
            self._log("find_registration", started, error, id=str(registration_id), found=found)

    async def all_registrations(self) -> list[Registration]:
        started = time.perf_counter()
        error: BaseException | None = None
        count = 0
        try:
            registrations = await self._service.all_registrations()
            count = len(registrations)
            return registrations
        except BaseException as exc:
            error = exc
            raise
        finally:
            self._log("all_registrations", started, error, count=count)
