"""Response envelopes for the control panel API."""

import json
from typing import Any, List, Optional

from fastapi import Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

JSON_HEADERS = {"Cache-Control": "max-age=0"}


class Versions(BaseModel):
    """Versions of this service and the game catalog."""

    gsw: str
    gamedig: str


class Services(BaseModel):
    """Whether each downstream integration has its secrets configured."""

    steam: bool
    discord: bool
    telegram: bool
    slack: bool


class ApiResponse(BaseModel):
    """Uniform API envelope; unset fields are omitted on the wire."""

    message: Optional[str] = None
    error: Optional[str] = None
    versions: Optional[Versions] = None
    services: Optional[Services] = None
    debug: Optional[bool] = None
    config: Optional[List[Any]] = None


def dump_json(payload: Any, debug: bool = False) -> str:
    """Serialize a payload, pretty-printed in debug mode."""
    if debug:
        return json.dumps(payload, ensure_ascii=False, indent=2)
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def render_json(payload: Any, status_code: int = 200, debug: bool = False) -> Response:
    """Render an arbitrary JSON payload with the API cache headers."""
    return Response(
        content=dump_json(payload, debug),
        status_code=status_code,
        media_type="application/json",
        headers=JSON_HEADERS,
    )


def render_envelope(envelope: ApiResponse, status_code: int = 200, debug: bool = False) -> Response:
    """Render an ApiResponse envelope."""
    return render_json(envelope.model_dump(exclude_none=True), status_code, debug)


def render_failure(exc: Exception, debug: bool = False) -> Response:
    """Render a downstream failure as a 500 envelope carrying only its message."""
    return render_envelope(ApiResponse(error=str(exc) or repr(exc)), 500, debug)


def render_html_error(status_code: int) -> HTMLResponse:
    """Render the minimal HTML error page."""
    return HTMLResponse(
        content=f"<html><head></head><body>{status_code} &#x1F4A2</body></html>",
        status_code=status_code,
    )
