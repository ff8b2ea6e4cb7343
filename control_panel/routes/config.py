"""Watcher configuration routes."""

import json
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request

from control_panel.config import Settings
from control_panel.dependencies import (
    InvalidRouteError,
    get_settings,
    get_watcher_service,
    require_btoken,
)
from control_panel.responses import ApiResponse, render_envelope, render_failure
from control_panel.routes import ALL_METHODS, AnyMethodRoute
from control_panel.services.watcher_service import WatcherService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_btoken)])

CONFIG_UPDATED_MESSAGE = "Configuration updated. Watcher restarted."


def parse_config_body(body: bytes) -> List[Any]:
    """Decode a POSTed configuration list.

    Falsy JSON values (``null``, ``false``, ``0``, ``""``) mean an empty list.
    Decode errors propagate.

    Args:
        body: Raw request body.

    Returns:
        list: Configuration records.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON.
        ValueError: If the body is not a JSON array.
    """
    data = json.loads(body)
    if data in (None, 0, ""):
        data = []
    if not isinstance(data, list):
        raise ValueError("Configuration must be a JSON array")
    return data


@router.get("/config")
@router.get("/config/{rest:path}")
async def get_config(
    settings: Settings = Depends(get_settings),
    service: WatcherService = Depends(get_watcher_service),
):
    """Get the full watcher configuration.

    Returns:
        Response: ``{"config": [...]}``
    """
    try:
        entries = await service.read_config()
    except Exception as e:
        logger.error(f"Failed to read configuration: {e}", exc_info=True)
        return render_failure(e, settings.dbg)

    return render_envelope(ApiResponse(config=entries), debug=settings.dbg)


@router.post("/config")
@router.post("/config/{rest:path}")
async def update_config(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: WatcherService = Depends(get_watcher_service),
):
    """Replace the watcher configuration and restart the watcher.

    The response is only sent once the restart has completed.

    Returns:
        Response: ``{"message": ...}``
    """
    try:
        body = await request.body()
        entries = parse_config_body(body)
        await service.apply_config(entries)
    except Exception as e:
        logger.error(f"Failed to update configuration: {e}", exc_info=True)
        return render_failure(e, settings.dbg)

    return render_envelope(ApiResponse(message=CONFIG_UPDATED_MESSAGE), debug=settings.dbg)


async def config_invalid_method():
    """Reject every other method on /config."""
    raise InvalidRouteError()


for _path in ("/config", "/config/{rest:path}"):
    router.add_api_route(
        _path, config_invalid_method, methods=ALL_METHODS, route_class_override=AnyMethodRoute
    )
