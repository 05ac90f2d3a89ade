"""
Request Logging

Wraps the assembled application and logs one line per request:

    GET /docs 301 0.42ms yaml IP:10.0.0.7

The fourth field is the layer that answered: the redirect handler that
matched (yaml, json, map), the database-backed redirect route (database),
or the FastAPI application itself (app).
"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger("urlshort")

DEFAULT_SOURCE = "app"


def answered_by(request: Request) -> str:
    """Name of the layer that answered ``request``."""
    return request.scope.get("state", {}).get("redirect_source", DEFAULT_SOURCE)


class RedirectLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, processing time, answering layer and client
    IP, and adds an X-Process-Time header (seconds).
    """

    async def dispatch(self, request: Request, call_next):
        client_ip = self._get_client_ip(request)
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} "
            f"{response.status_code} {process_time*1000:.2f}ms "
            f"{answered_by(request)} IP:{client_ip}"
        )

        response.headers["X-Process-Time"] = str(process_time)

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Client IP, preferring the first X-Forwarded-For hop when a proxy sets it."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        return request.client.host if request.client else "unknown"


def with_request_logging(app: ASGIApp) -> ASGIApp:
    """Wrap ``app`` so every request it serves is logged."""
    return RedirectLoggingMiddleware(app)


def configure_logging(level: str) -> None:
    """Set the level of the urlshort logger hierarchy."""
    logger.setLevel(level.upper())
