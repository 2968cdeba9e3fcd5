"""Request logging middleware.

One line per HTTP request: method, path, status code, latency and the
principal resolved by GatewayAuthMiddleware ("-" for anonymous or
service-to-service calls). 4xx lines go out at WARNING, 5xx at ERROR.

Log format:
    INFO [GET] /api/users/42 → 200 (12ms) principal=42
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("us.request")


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        principal = getattr(request.state, "principal", None)
        logger.log(
            _level_for(response.status_code),
            "[%s] %s → %d (%.0fms) principal=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            principal.name if principal else "-",
        )
        return response
