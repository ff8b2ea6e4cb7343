"""Watcher flush routes."""

import logging

from fastapi import APIRouter, Depends

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
from watcher.watcher import FlushScope

logger = logging.getLogger(__name__)

router = APIRouter(route_class=AnyMethodRoute)


@router.api_route("/flush/{scope}", methods=ALL_METHODS, dependencies=[Depends(require_btoken)])
@router.api_route(
    "/flush/{scope}/{rest:path}", methods=ALL_METHODS, dependencies=[Depends(require_btoken)]
)
async def flush_scope(
    scope: str,
    settings: Settings = Depends(get_settings),
    service: WatcherService = Depends(get_watcher_service),
):
    """Flush one scope of watcher state.

    Only the segment after ``/flush/`` selects the scope; anything below it is
    ignored.

    Args:
        scope: One of servers, discord, telegram, slack.

    Returns:
        Response: ``{"message": "🗑️ <Scope> data flushed."}``

    Raises:
        InvalidRouteError: If the scope is unknown.
    """
    if scope not in FlushScope.values():
        raise InvalidRouteError()

    try:
        await service.flush(scope)
    except Exception as e:
        logger.error(f"Failed to flush {scope}: {e}", exc_info=True)
        return render_failure(e, settings.dbg)

    label = scope[:1].upper() + scope[1:]
    return render_envelope(ApiResponse(message=f"🗑️ {label} data flushed."), debug=settings.dbg)
