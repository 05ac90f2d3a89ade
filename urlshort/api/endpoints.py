"""
FastAPI Endpoints for the Redirect Service

These endpoints form the fallback application: they only see requests
whose path was not claimed by the configured redirect handlers.

- POST /redirects: register a database-backed redirect
- GET /redirects: list database-backed redirects
- GET /{path}: serve a database-backed redirect, 404 otherwise

Endpoints validate input, apply rate limits and translate service errors
into HTTP responses; the lookup logic lives in RedirectService.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from urlshort.api.schemas import (
    CreateRedirectRequest,
    RedirectListResponse,
    RedirectRecordResponse,
)
from urlshort.core.exceptions import DatabaseError, InvalidRedirectError
from urlshort.core.rate_limit import RATE_LIMITS, limiter
from urlshort.db.session import get_session
from urlshort.handlers.base import mark_source, redirect_response
from urlshort.services.redirect_service import RedirectService

router = APIRouter()


@router.post(
    "/redirects",
    response_model=RedirectRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a redirect",
    description="Stores a path to URL redirect served when no configured redirect matches"
)
@limiter.limit(RATE_LIMITS["create"])
async def create_redirect(
    request: Request,  # Required by slowapi
    body: CreateRedirectRequest,
    session: AsyncSession = Depends(get_session)
) -> RedirectRecordResponse:
    """
    Register a new database-backed redirect.

    Raises:
        HTTPException 400: If the path is not a plain absolute path
        HTTPException 500: If the database insert fails
    """
    redirect_service = RedirectService(session)
    try:
        record = await redirect_service.create_redirect(body.path, body.url)
    except InvalidRedirectError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except DatabaseError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return RedirectRecordResponse.model_validate(record)


@router.get(
    "/redirects",
    response_model=RedirectListResponse,
    summary="List redirects",
    description="Returns the database-backed redirects in match-priority order"
)
@limiter.limit(RATE_LIMITS["list"])
async def list_redirects(
    request: Request,
    session: AsyncSession = Depends(get_session)
) -> RedirectListResponse:
    records = await RedirectService(session).list_redirects()
    return RedirectListResponse(
        redirects=[RedirectRecordResponse.model_validate(record) for record in records],
        count=len(records)
    )


@router.get(
    "/{path:path}",
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    summary="Redirect a path",
    description="Redirects to the URL registered for the request path"
)
@limiter.limit(RATE_LIMITS["redirect"])
async def redirect_path(
    path: str,
    request: Request,
    session: AsyncSession = Depends(get_session)
) -> Response:
    """
    Redirect to the URL registered for the request path.

    Raises:
        HTTPException 404: If no redirect is registered for the path
        HTTPException 429: If rate limit exceeded
    """
    request_path = request.scope["path"]

    redirect_service = RedirectService(session)
    url = await redirect_service.get_redirect_url(request_path)

    if not url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No redirect registered for '{request_path}'"
        )

    mark_source(request.scope, "database")
    return redirect_response(url)
