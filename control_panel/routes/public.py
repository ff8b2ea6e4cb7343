"""Unauthenticated routes: liveness probe and game catalog."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from control_panel.config import Settings
from control_panel.dependencies import get_catalog, get_settings
from control_panel.responses import render_json
from control_panel.routes import ALL_METHODS, AnyMethodRoute
from game_catalog.catalog import GameCatalog

logger = logging.getLogger(__name__)

router = APIRouter(route_class=AnyMethodRoute)


@router.api_route("/ping", methods=ALL_METHODS, response_class=PlainTextResponse)
async def ping(settings: Settings = Depends(get_settings)):
    """Liveness probe.

    Returns:
        str: ``pong``
    """
    if settings.dbg:
        logger.debug("ping")
    return PlainTextResponse("pong")


@router.api_route("/gamedig-games", methods=ALL_METHODS)
async def list_games(
    settings: Settings = Depends(get_settings),
    catalog: GameCatalog = Depends(get_catalog),
):
    """List supported game types and query protocols.

    Returns:
        Response: ``{"enum": [...], "options": {"enum_titles": [...]}}``
    """
    return render_json(catalog.select_options(), debug=settings.dbg)
