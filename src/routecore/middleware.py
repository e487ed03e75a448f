"""HTTP access logging middleware."""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from routecore.logs import Stopwatch

__all__ = ["AccessLogMiddleware"]


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request in an nginx-like layout.

    Severity follows the status class: 5xx at error, 4xx at warning,
    everything else at info.
    """

    def __init__(self, app, logger: logging.Logger | None = None) -> None:
        super().__init__(app)
        self._logger = logger or logging.getLogger("routecore.access")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        timer = Stopwatch()
        response = await call_next(request)
        duration_ms = timer.duration()

        client = request.client.host if request.client else "-"
        status = response.status_code
        message = (
            f'{client} "{request.method} {request.url.path} HTTP/{request.scope.get("http_version", "1.1")}" '
            f'{status} {duration_ms:.0f}ms "{request.headers.get("referer", "-")}" '
            f'"{request.headers.get("user-agent", "-")}"'
        )
        extra = {"method": request.method, "path": request.url.path, "status": status, "duration_ms": duration_ms}
        if status >= 500:
            self._logger.error(message, extra=extra)
        elif status >= 400:
            self._logger.warning(message, extra=extra)
        else:
            self._logger.info(message, extra=extra)
        return response
