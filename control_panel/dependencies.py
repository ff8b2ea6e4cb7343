"""FastAPI dependencies for authentication and shared services."""

from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from control_panel.config import Settings
from control_panel.services.watcher_service import WatcherService
from game_catalog.catalog import GameCatalog
from security.auth import authorize_token


class InvalidRouteError(HTTPException):
    """Raised for an authorized request that matches no operation."""

    def __init__(self, detail: str = "Invalid Request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_clock(request: Request) -> Callable[[], int]:
    return request.app.state.clock


def get_watcher_service(request: Request) -> WatcherService:
    return request.app.state.watcher_service


def get_catalog(request: Request) -> GameCatalog:
    return request.app.state.catalog


async def require_btoken(
    x_btoken: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    clock: Callable[[], int] = Depends(get_clock),
) -> bool:
    """Require a valid x-btoken header.

    Args:
        x_btoken: Bearer token header.
        settings: Application settings.
        clock: Millisecond clock used for expiry checks.

    Returns:
        bool: True if the token is valid.

    Raises:
        MissingTokenError: If the API is disabled or the header is absent.
        APIAuthError: If the token is invalid or expired.
    """
    return authorize_token(x_btoken, settings.security, clock())
