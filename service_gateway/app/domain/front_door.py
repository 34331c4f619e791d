"""
Front door applied to every client-facing route.

Sets permissive CORS headers, answers preflight requests, and rejects any
verb other than the one the route accepts, all before route logic runs.
"""

from typing import Dict, Optional

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.errors import MethodNotAllowedError
from shared.logging import get_logger, set_route
from shared.metrics import MetricsCollector

PREFLIGHT_METHOD = "OPTIONS"


class FrontDoor:
    """Table of client-facing routes and the single verb each accepts."""

    def __init__(self):
        self._routes: Dict[str, str] = {}
        self.logger = get_logger("gateway.front_door")

    def register(self, path: str, method: str) -> None:
        self._routes[path] = method.upper()

    def accepted_method(self, path: str) -> Optional[str]:
        return self._routes.get(path)

    @property
    def routes(self) -> Dict[str, str]:
        return dict(self._routes)

    def cors_headers(self, accepted: str) -> Dict[str, str]:
        return {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": f"{accepted}, {PREFLIGHT_METHOD}",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def screen(self, request: Request, accepted: str) -> Optional[Response]:
        """Return a short-circuit response, or None when the route should run."""
        if request.method == PREFLIGHT_METHOD:
            return Response(status_code=200)

        if request.method != accepted:
            error = MethodNotAllowedError(details={"method": request.method, "accepted": accepted})
            self.logger.warning(
                "Method not allowed",
                path=request.url.path,
                method=request.method,
                accepted=accepted,
            )
            return PlainTextResponse(error.message, status_code=error.status_code)

        return None


class FrontDoorMiddleware(BaseHTTPMiddleware):
    """Runs the front door ahead of the routes it knows about."""

    def __init__(self, app, front_door: FrontDoor, metrics: Optional[MetricsCollector] = None):
        super().__init__(app)
        self.front_door = front_door
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next):
        accepted = self.front_door.accepted_method(request.url.path)
        if accepted is None:
            return await call_next(request)

        set_route(request.url.path)
        response = self.front_door.screen(request, accepted)
        if response is None:
            response = await call_next(request)
        elif response.status_code == MethodNotAllowedError.status_code and self.metrics:
            self.metrics.record_error(MethodNotAllowedError.code)

        response.headers.update(self.front_door.cors_headers(accepted))
        return response
