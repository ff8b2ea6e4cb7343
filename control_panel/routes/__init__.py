"""HTTP routes for the control panel."""

from typing import Tuple

from fastapi.routing import APIRoute
from starlette.routing import Match
from starlette.types import Receive, Scope, Send

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class AnyMethodRoute(APIRoute):
    """Route that answers every HTTP method, including non-standard verbs.

    ``methods`` is only bookkeeping here; a path match is always a full match,
    so no request ever ends in a 405.
    """

    def matches(self, scope: Scope) -> Tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            match = Match.FULL
        return match, child_scope

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)
