"""
Registration HTTP Transport

Routes:
- POST   /v1/registrations          create
- GET    /v1/registrations          list (or fetch one with ?id=)
- DELETE /v1/registrations?id=      delete
- POST   /v1/registrations/update   partial update

Requests are decoded before any endpoint runs; decode failures answer 400.
Endpoint responses that carry an error are rendered as `{"error": ...}` with the
status of the error's kind.
"""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

import structlog
from fastapi import APIRouter, Request
from pydantic import BaseModel, ValidationError
from starlette.responses import Response

from mud.kernel.errors import DecodeError
from mud.kernel.http.errors import error_response
from mud.kernel.http.responses import JSONUTF8Response
from mud.kernel.ids import parse_id
from mud.registration.endpoints import (
    EditRegistrationRequest,
    EmptyRequest,
    Endpoint,
    EndpointResponse,
    NewRegistrationRequest,
    RegistrationRequestWithId,
    make_endpoints,
)
from mud.registration.service import RegistrationService

logger = structlog.get_logger()

RequestT = TypeVar("RequestT", bound=BaseModel)
Decoder = Callable[[Request], Awaitable[BaseModel]]


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


async def _decode_body(request: Request, model: type[RequestT]) -> RequestT:
    body = await request.body()
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(message=f"malformed request body: {_describe(exc)}") from exc


async def decode_new_registration_request(request: Request) -> NewRegistrationRequest:
    return await _decode_body(request, NewRegistrationRequest)


async def decode_update_registration_request(request: Request) -> EditRegistrationRequest:
    return await _decode_body(request, EditRegistrationRequest)


async def decode_request_with_id(request: Request) -> RegistrationRequestWithId:
    raw_id = request.query_params.get("id")
    if not raw_id:
        raise DecodeError(message="Bad Route - missing id")
    try:
        return RegistrationRequestWithId(id=parse_id(raw_id))
    except ValueError as exc:
        raise DecodeError(message=f"invalid id {raw_id!r}") from exc


async def decode_request(request: Request) -> EmptyRequest:
    return EmptyRequest()


def encode_error(exc: BaseException) -> Response:
    return error_response(exc)


def encode_response(response: EndpointResponse) -> Response:
    if response.error is not None:
        return encode_error(response.error)
    return JSONUTF8Response(content=response.model_dump(mode="json", exclude_none=True))


async def serve(endpoint: Endpoint, decode: Decoder, request: Request) -> Response:
    """Decode, invoke the endpoint and encode, the same way for every route."""
    try:
        decoded = await decode(request)
    except DecodeError as exc:
        logger.warning(
            "Request decode failed",
            method=request.method,
            path=request.url.path,
            error=exc.message,
        )
        return encode_error(exc)

    try:
        response = await endpoint(decoded)
    except Exception as exc:
        logger.exception(
            "Endpoint failed",
            method=request.method,
            path=request.url.path,
            error=str(exc),
        )
        return encode_error(exc)

    return encode_response(response)


def make_router(service: RegistrationService) -> APIRouter:
    """Build the registration routes around `service`."""
    endpoints = make_endpoints(service)
    router = APIRouter(prefix="/v1/registrations", tags=["Registrations"])

    @router.post("")
    async def new_registration(request: Request) -> Response:
        return await serve(endpoints.new_registration, decode_new_registration_request, request)

    @router.get("")
    async def get_registrations(request: Request) -> Response:
        if "id" in request.query_params:
            return await serve(endpoints.get_registration, decode_request_with_id, request)
        return await serve(endpoints.get_all_registrations, decode_request, request)

    @router.delete("")
    async def delete_registration(request: Request) -> Response:
        return await serve(endpoints.delete_registration, decode_request_with_id, request)

    @router.post("/update")
    async def update_registration(request: Request) -> Response:
        return await serve(endpoints.update_registration, decode_update_registration_request, request)

    return router
