"""
Shared pieces of the redirect handlers.

Every handler is a plain ASGI application wrapping another ASGI
application (the fallback). Only HTTP scopes are inspected; lifespan and
websocket scopes go straight to the fallback.

Redirect targets are sent as configured. Only characters that cannot
appear in a header (non-ASCII and control characters) are
percent-encoded; spaces, braces and pipes reach the client untouched.
"""

from typing import Optional
from urllib.parse import quote

from starlette import status
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

REDIRECT_STATUS_CODE = status.HTTP_301_MOVED_PERMANENTLY

# Printable ASCII, kept as-is in the Location header
_LOCATION_SAFE = "".join(chr(code) for code in range(0x20, 0x7F))


def request_path(scope: Scope) -> Optional[str]:
    """Return the request path of an HTTP scope, or None for other scope types."""
    if scope["type"] != "http":
        return None
    return scope["path"]


def mark_source(scope: Scope, source: str) -> None:
    """Record which redirect layer answered the request, for request logging."""
    scope.setdefault("state", {})["redirect_source"] = source


def redirect_response(url: str) -> Response:
    """Build a 301 response whose Location is ``url``."""
    return Response(
        status_code=REDIRECT_STATUS_CODE,
        headers={"location": quote(url, safe=_LOCATION_SAFE)}
    )


async def send_redirect(
    url: str,
    source: str,
    scope: Scope,
    receive: Receive,
    send: Send
) -> None:
    """Answer the request with a 301 pointing at ``url``."""
    mark_source(scope, source)
    await redirect_response(url)(scope, receive, send)
