from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import Response

from mud.kernel.errors import MudError, find_mud_error
from mud.kernel.http.responses import JSONUTF8Response

logger = structlog.get_logger()


def error_response(exc: BaseException) -> Response:
    """Render an error as `{"error": message}` with the status it maps to."""
    mud_error = find_mud_error(exc)
    if mud_error is not None:
        return JSONUTF8Response(status_code=mud_error.status_code, content=mud_error.to_public_dict())
    return JSONUTF8Response(status_code=500, content={"error": str(exc) or "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Register service-wide exception handlers on a FastAPI app.

    Every error leaves the process as `{"error": "<message>"}`.
    """

    @app.exception_handler(MudError)
    async def _mud_error_handler(request: Request, exc: MudError) -> Response:
        return error_response(exc)

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException) -> Response:
        headers = dict(exc.headers or {})
        return JSONUTF8Response(
            status_code=int(exc.status_code),
            content={"error": str(exc.detail)},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        return JSONUTF8Response(status_code=400, content={"error": str(exc.errors())})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        request_id = getattr(getattr(request, "state", None), "request_id", None)
        logger.exception("Unhandled exception", request_id=request_id, error=str(exc))
        return JSONUTF8Response(status_code=500, content={"error": "Internal Server Error"})
