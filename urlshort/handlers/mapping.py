"""
Exact-Match Redirector

Builds an ASGI handler from an in-memory mapping of request paths to
target URLs. Paths found in the mapping are answered with a 301; all
other requests are passed to the fallback application untouched.
"""

import logging
from types import MappingProxyType
from typing import Mapping

from starlette.types import ASGIApp, Receive, Scope, Send

from urlshort.handlers.base import request_path, send_redirect

logger = logging.getLogger(__name__)


def map_handler(paths_to_urls: Mapping[str, str], fallback: ASGIApp) -> ASGIApp:
    """
    Return an ASGI application that redirects any path present in
    ``paths_to_urls`` to its URL, and calls ``fallback`` otherwise.

    The mapping is copied, so later changes to ``paths_to_urls`` do not
    affect the returned handler.

    Args:
        paths_to_urls: Request path -> redirect URL
        fallback: Application invoked for paths that are not in the mapping

    Returns:
        ASGI application
    """
    redirects = MappingProxyType(dict(paths_to_urls))

    async def handler(scope: Scope, receive: Receive, send: Send) -> None:
        path = request_path(scope)
        if path is not None:
            url = redirects.get(path)
            if url is not None:
                logger.debug(f"map redirect {path} -> {url}")
                await send_redirect(url, "map", scope, receive, send)
                return
        await fallback(scope, receive, send)

    return handler
