"""
Registration Endpoints

One transport-agnostic endpoint per service operation. Each takes a request
model and returns a response model. Typed service failures travel inside the
response as `error`; anything else propagates to the transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from uuid import UUID

from pydantic import Base64Bytes, BaseModel, ConfigDict, Field

from mud.kernel.errors import MudError
from mud.registration.model import Registration
from mud.registration.service import RegistrationService

Endpoint = Callable[[Any], Awaitable["EndpointResponse"]]


# =============================================================================
# Requests
# =============================================================================


class NewRegistrationRequest(BaseModel):
    username: str = ""
    password: Base64Bytes = b""
    email: str = ""
    timezone: str = ""
    shortbio: str = ""
    # Accepted on the wire; creation always starts unvalidated.
    validated: bool = False


class EditRegistrationRequest(BaseModel):
    id: UUID | None = None
    username: str | None = None
    password: Base64Bytes | None = None
    email: str | None = None
    timezone: str | None = None
    shortbio: str | None = None
    validated: bool | None = None


class RegistrationRequestWithId(BaseModel):
    id: UUID


class EmptyRequest(BaseModel):
    pass


# =============================================================================
# Responses
# =============================================================================


class RegistrationView(BaseModel):
    id: UUID
    name: str
    email: str
    timezone: str
    shortbio: str = ""
    validated: bool = False

    @classmethod
    def from_entity(cls, registration: Registration) -> "RegistrationView":
        return cls(
            id=registration.id,
            name=registration.name,
            email=registration.email,
            timezone=registration.timezone,
            shortbio=registration.short_bio,
            validated=registration.validated,
        )


class EndpointResponse(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    error: MudError | None = Field(default=None, exclude=True)


class NewRegistrationResponse(EndpointResponse):
    id: UUID | None = None


class EditRegistrationResponse(EndpointResponse):
    id: UUID | None = None
    username: str | None = None
    timezone: str | None = None
    shortbio: str | None = None
    email: str | None = None


class DeleteRegistrationResponse(EndpointResponse):
    pass


class GetRegistrationResponse(EndpointResponse):
    registration: RegistrationView | None = None


class GetAllRegistrationsResponse(EndpointResponse):
    registrations: list[RegistrationView] = Field(default_factory=list)


# =============================================================================
# Endpoints
# =============================================================================


def make_new_registration_endpoint(service: RegistrationService) -> Endpoint:
    async def endpoint(request: NewRegistrationRequest) -> NewRegistrationResponse:
        try:
            registration = await service.new_registration(
                request.username,
                request.password,
                request.email,
                request.shortbio,
                request.timezone,
            )
        except MudError as exc:
            return NewRegistrationResponse(error=exc)
        return NewRegistrationResponse(id=registration.id)

    return endpoint


def make_update_registration_endpoint(service: RegistrationService) -> Endpoint:
    async def endpoint(request: EditRegistrationRequest) -> EditRegistrationResponse:
        try:
            registration = await service.edit_registration(
                request.id,
                request.username,
                request.password,
                request.email,
                request.shortbio,
                request.timezone,
                request.validated,
            )
        except MudError as exc:
            return EditRegistrationResponse(error=exc)
        return EditRegistrationResponse(
            id=registration.id,
            username=registration.name,
            timezone=registration.timezone,
            shortbio=registration.short_bio,
            email=registration.email,
        )

    return endpoint


def make_delete_registration_endpoint(service: RegistrationService) -> Endpoint:
    async def endpoint(request: RegistrationRequestWithId) -> DeleteRegistrationResponse:
        try:
            await service.delete_registration(request.id)
        except MudError as exc:
            return DeleteRegistrationResponse(error=exc)
        return DeleteRegistrationResponse()

    return endpoint


def make_get_registration_endpoint(service: RegistrationService) -> Endpoint:
    async def endpoint(request: RegistrationRequestWithId) -> GetRegistrationResponse:
        try:
            registration = await service.find_by_id(request.id)
        except MudError as exc:
            return GetRegistrationResponse(error=exc)
        if registration is None:
            return GetRegistrationResponse()
        return GetRegistrationResponse(registration=RegistrationView.from_entity(registration))

    return endpoint


def make_get_all_registrations_endpoint(service: RegistrationService) -> Endpoint:
    async def endpoint(request: EmptyRequest) -> GetAllRegistrationsResponse:
        try:
            registrations = await service.all_registrations()
        except MudError as exc:
            return GetAllRegistrationsResponse(error=exc)
        return GetAllRegistrationsResponse(
            registrations=[RegistrationView.from_entity(r) for r in registrations]
        )

    return endpoint


@dataclass(frozen=True)
class RegistrationEndpoints:
    new_registration: Endpoint
    update_registration: Endpoint
    delete_registration: Endpoint
    get_registration: Endpoint
    get_all_registrations: Endpoint


def make_endpoints(service: RegistrationService) -> RegistrationEndpoints:
    return RegistrationEndpoints(
        new_registration=make_new_registration_endpoint(service),
        update_registration=make_update_registration_endpoint(service),
        delete_registration=make_delete_registration_endpoint(service),
        get_registration=make_get_registration_endpoint(service),
        get_all_registrations=make_get_all_registrations_endpoint(service),
    )
