"""Global error handling middleware."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from control_panel.dependencies import InvalidRouteError
from control_panel.responses import ApiResponse, render_envelope, render_html_error
from security.auth import APIAuthError

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup global exception handlers for the app.

    JSON API errors (bad token, unknown operation) render the ``{"error": ...}``
    envelope; everything else renders the minimal HTML error page.

    Args:
        app: FastAPI application instance.
    """

    def debug_enabled(request: Request) -> bool:
        return request.app.state.settings.dbg

    @app.exception_handler(APIAuthError)
    async def auth_exception_handler(request: Request, exc: APIAuthError):
        """Handle invalid bearer tokens."""
        logger.info(f"Rejected token for {request.url.path}")
        return render_envelope(
            ApiResponse(error=exc.detail), status.HTTP_401_UNAUTHORIZED, debug_enabled(request)
        )

    @app.exception_handler(InvalidRouteError)
    async def invalid_route_handler(request: Request, exc: InvalidRouteError):
        """Handle authorized requests that match no operation."""
        return render_envelope(
            ApiResponse(error=exc.detail), status.HTTP_400_BAD_REQUEST, debug_enabled(request)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle missing tokens, unknown routes and other HTTP errors."""
        logger.debug(f"HTTP {exc.status_code} for {request.url}: {exc.detail}")
        return render_html_error(exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle malformed requests."""
        logger.warning(f"Malformed request: {exc.errors()}")
        return render_html_error(status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return render_html_error(status.HTTP_500_INTERNAL_SERVER_ERROR)
