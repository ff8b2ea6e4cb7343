"""Main FastAPI application for the GSW control panel."""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI, Request

from control_panel import __version__
from control_panel.config import Settings, get_settings
from control_panel.middleware.error_handler import setup_exception_handlers
from control_panel.routes import assets, features, flush, public
from control_panel.routes import config as config_router
from control_panel.services.watcher_service import WatcherControl, WatcherService
from game_catalog.catalog import GameCatalog, get_catalog
from security.auth import current_time_ms
from watcher.watcher import Watcher

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=logging.DEBUG if settings.dbg else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def create_app(
    settings: Optional[Settings] = None,
    watcher: Optional[WatcherControl] = None,
    catalog: Optional[GameCatalog] = None,
    clock: Callable[[], int] = current_time_ms,
) -> FastAPI:
    """Create the control panel application.

    Args:
        settings: Application settings (loaded from env if not provided).
        watcher: Watcher to control (built from settings if not provided).
        catalog: Game catalog (bundled catalog if not provided).
        clock: Millisecond clock used for token expiry.

    Returns:
        FastAPI: Configured application.
    """
    if settings is None:
        settings = get_settings()
    if watcher is None:
        watcher = Watcher(settings.watcher)
    if catalog is None:
        catalog = get_catalog()

    settings.security.validate()
    settings.watcher.validate()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start the watcher with the service and stop it on shutdown."""
        logger.info("Starting watcher...")
        await watcher.start()
        logger.info(f"GSW Control Panel service started {settings.host}:{settings.port}")
        yield
        logger.info("Shutting down GSW Control Panel...")
        stop = getattr(watcher, "stop", None)
        if stop is not None:
            await stop()

    app = FastAPI(
        title=settings.app_name,
        description="Control panel for the game server watcher",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.clock = clock
    app.state.catalog = catalog
    app.state.watcher = watcher
    app.state.watcher_service = WatcherService(watcher)

    if settings.dbg:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            logger.debug(f"DBG: {datetime.now(timezone.utc).isoformat()} {request.url}")
            return await call_next(request)

    setup_exception_handlers(app)

    app.include_router(public.router, tags=["Public"])
    app.include_router(features.router, tags=["Features"])
    app.include_router(config_router.router, tags=["Configuration"])
    app.include_router(flush.router, tags=["Flush"])
    # Catch-all, must stay last
    app.include_router(assets.router, tags=["Web UI"])

    return app


def main() -> None:
    """Run the control panel with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.dbg else "info",
    )


if __name__ == "__main__":
    main()
