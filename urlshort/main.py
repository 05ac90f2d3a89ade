"""
Application Entry Point

Assembles the served ASGI application:

    request logging -> YAML handler -> JSON handler -> map handler -> FastAPI application

Each redirect handler answers the paths it knows with a 301 and passes
everything else inward. The FastAPI application at the core serves the
health endpoints, the redirect management API and database-backed
redirects.

Run with:
    uvicorn urlshort.main:app
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.types import ASGIApp

from urlshort import __version__
from urlshort.api import endpoints
from urlshort.core.rate_limit import limiter
from urlshort.core.setting import Settings, settings
from urlshort.handlers import BuildResult, json_handler, map_handler, yaml_handler
from urlshort.middleware.logging import configure_logging, with_request_logging

logger = logging.getLogger(__name__)

DocumentBuilder = Callable[[bytes, ASGIApp], BuildResult]


def build_fallback_app() -> FastAPI:
    """Create the FastAPI application that serves every unclaimed path."""
    app = FastAPI(
        title="URL Redirect Service",
        description="Redirects configured paths and falls back to a managed redirect table",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints must be registered before the catch-all redirect route
    @app.get("/", tags=["Health"])
    async def root():
        return {
            "message": "URL Redirect Service",
            "version": __version__,
            "docs": "/docs"
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "healthy"}

    app.include_router(endpoints.router, tags=["Redirects"])

    return app


def load_redirect_document(path: Path) -> bytes:
    """
    Read a redirect document from disk.

    Raises:
        FileNotFoundError: If the configured file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Redirect document not found at: {path}")
    return path.read_bytes()


def _wrap_with_document(
    builder: DocumentBuilder,
    path: Path,
    fallback: ASGIApp,
    strict: bool
) -> ASGIApp:
    handler, error = builder(load_redirect_document(path), fallback)
    if error is not None:
        if strict:
            raise error
        logger.warning(f"Serving {path} partially, {error}")
    else:
        logger.info(f"Loaded redirects from {path}")
    return handler


def create_app(app_settings: Optional[Settings] = None) -> ASGIApp:
    """
    Build the served application from settings.

    Args:
        app_settings: Settings to use, defaults to the environment settings

    Returns:
        ASGI application

    Raises:
        RedirectConfigError: If STRICT_REDIRECT_CONFIG is set and a redirect
            document cannot be fully decoded
        FileNotFoundError: If a configured redirect document is missing
    """
    app_settings = app_settings or settings
    configure_logging(app_settings.LOG_LEVEL)

    handler = map_handler(app_settings.PATHS_TO_URLS, build_fallback_app())

    if app_settings.REDIRECTS_JSON_FILE is not None:
        handler = _wrap_with_document(
            json_handler,
            app_settings.REDIRECTS_JSON_FILE,
            handler,
            app_settings.STRICT_REDIRECT_CONFIG
        )

    if app_settings.REDIRECTS_YAML_FILE is not None:
        handler = _wrap_with_document(
            yaml_handler,
            app_settings.REDIRECTS_YAML_FILE,
            handler,
            app_settings.STRICT_REDIRECT_CONFIG
        )

    return with_request_logging(handler)


app = create_app()
