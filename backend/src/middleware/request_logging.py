"""Request logging middleware: one log line and one metrics tick per request."""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from src.monitoring.metrics import record_request

logger = logging.getLogger(__name__)


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


def _route_template(request: Request) -> str:
    # Matched route path, e.g. /v1/api/stations/{station_id}; raw path when nothing matched.
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        record_request(response.status_code)
        logger.info(
            "request method=%s route=%s path=%s status=%s duration_ms=%.1f client=%s",
            request.method,
            _route_template(request),
            request.url.path,
            response.status_code,
            duration_ms,
            _client_ip(request),
        )
        return response
