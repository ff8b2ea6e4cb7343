"""Feature and version metadata route."""

import logging
import os
from typing import Dict, Mapping, Optional

from fastapi import APIRouter, Depends

from control_panel import __version__
from control_panel.config import Settings
from control_panel.dependencies import get_catalog, get_settings, require_btoken
from control_panel.responses import ApiResponse, Services, Versions, render_envelope, render_failure
from control_panel.routes import ALL_METHODS, AnyMethodRoute
from game_catalog.catalog import GameCatalog

logger = logging.getLogger(__name__)

router = APIRouter(route_class=AnyMethodRoute)


def integration_services(environ: Optional[Mapping[str, str]] = None) -> Dict[str, bool]:
    """Report which integrations have their secrets configured.

    Only presence is checked; values never leave the process.

    Args:
        environ: Environment mapping (defaults to ``os.environ``, read on each call).

    Returns:
        dict: Integration name -> configured flag.
    """
    if environ is None:
        environ = os.environ

    return {
        "steam": bool(environ.get("STEAM_WEB_API_KEY")),
        "discord": bool(environ.get("DISCORD_BOT_TOKEN")),
        "telegram": bool(environ.get("TELEGRAM_BOT_TOKEN")),
        "slack": bool(environ.get("SLACK_BOT_TOKEN") and environ.get("SLACK_APP_TOKEN")),
    }


@router.api_route("/features", methods=ALL_METHODS, dependencies=[Depends(require_btoken)])
@router.api_route(
    "/features/{rest:path}", methods=ALL_METHODS, dependencies=[Depends(require_btoken)]
)
async def get_features(
    settings: Settings = Depends(get_settings),
    catalog: GameCatalog = Depends(get_catalog),
):
    """Get service versions and configured integrations.

    Anything below ``/features/`` is answered the same way.

    Returns:
        Response: ``{"versions": ..., "services": ..., "debug"?: true}``
    """
    try:
        envelope = ApiResponse(
            versions=Versions(gsw=__version__, gamedig=catalog.version),
            services=Services(**integration_services()),
        )
    except Exception as e:
        logger.error(f"Failed to collect features: {e}", exc_info=True)
        return render_failure(e, settings.dbg)

    if settings.dbg:
        envelope.debug = True

    return render_envelope(envelope, debug=settings.dbg)
