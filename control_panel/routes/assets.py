"""Web UI assets and the fallback for unmatched paths.

This router must be included last: its catch-all path swallows everything the
other routers did not match.
"""

import logging
from pathlib import PurePosixPath
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import FileResponse, PlainTextResponse

from control_panel.config import Settings
from control_panel.dependencies import InvalidRouteError, get_clock, get_settings
from control_panel.responses import render_html_error
from control_panel.routes import ALL_METHODS, AnyMethodRoute
from security.auth import authorize_token

logger = logging.getLogger(__name__)

router = APIRouter(route_class=AnyMethodRoute)

EXT_MIME = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "png": "image/png",
}

UI_DISABLED_MESSAGE = "Configure the `SECRET` env var to enable the web UI!"


def asset_extension(name: str) -> Optional[str]:
    """Get the served extension of a top-level asset name.

    Returns:
        str: Extension without the dot, or None if ``name`` is not a servable asset.
    """
    if "/" in name or "\\" in name:
        return None
    ext = PurePosixPath(name).suffix[1:]
    return ext if ext in EXT_MIME else None


def serve_asset(name: str, ext: str, settings: Settings):
    """Serve a file from the public directory."""
    if not settings.security.enabled:
        return PlainTextResponse(UI_DISABLED_MESSAGE)

    public_dir = settings.public_path.resolve()
    file_path = (public_dir / name).resolve()
    if file_path.parent != public_dir or not file_path.is_file():
        logger.debug(f"Asset not found: {name}")
        return render_html_error(404)

    return FileResponse(file_path, media_type=EXT_MIME[ext])


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def serve_asset_or_reject(
    path: str,
    x_btoken: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    clock: Callable[[], int] = Depends(get_clock),
):
    """Serve a UI asset, or reject a path that matches no operation.

    Raises:
        MissingTokenError: If the path is not an asset and no usable token was sent.
        APIAuthError: If the token is invalid.
        InvalidRouteError: If the token is valid but the path is unknown.
    """
    name = path or "index.html"
    ext = asset_extension(name)
    if ext is not None:
        return serve_asset(name, ext, settings)

    authorize_token(x_btoken, settings.security, clock())
    raise InvalidRouteError()
