from __future__ import annotations

from starlette.responses import JSONResponse


class JSONUTF8Response(JSONResponse):
    """JSON response that always advertises its charset."""

    media_type = "application/json; charset=utf-8"
