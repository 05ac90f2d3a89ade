"""
Redirect Service

Lookup and management of the redirects stored in the database. These are
served by the fallback application, behind the exact-match and
structured-config handlers.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from urlshort.core.exceptions import DatabaseError, InvalidRedirectError
from urlshort.core.validators import sanitize_redirect_path, validate_url_length
from urlshort.db.models import RedirectRecord

logger = logging.getLogger(__name__)


class RedirectService:
    """
    Service for database-backed redirects.

    A path may be registered more than once; lookups return the earliest
    registration.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the redirect service with a database session.

        Args:
            session: Async database session for database operations
        """
        self.session = session

    async def get_redirect_url(self, path: str) -> Optional[str]:
        """
        Get the redirect target for a request path.

        Args:
            path: Request path, compared verbatim

        Returns:
            Target URL, or None when no redirect is registered for the path
        """
        statement = (
            select(RedirectRecord)
            .where(RedirectRecord.path == path)
            .order_by(RedirectRecord.id)
            .limit(1)
        )
        result = await self.session.execute(statement)
        record = result.scalars().first()
        if record:
            return record.url
        return None

    async def create_redirect(self, path: str, url: str) -> RedirectRecord:
        """
        Register a redirect.

        Args:
            path: Request path to redirect
            url: Redirect target

        Returns:
            The stored RedirectRecord

        Raises:
            InvalidRedirectError: If the path or URL is unusable
            DatabaseError: If the insert fails
        """
        clean_path = sanitize_redirect_path(path)
        if not clean_path:
            raise InvalidRedirectError(
                path,
                reason="Redirect path must start with '/' and contain no query, fragment or spaces"
            )
        if not validate_url_length(url):
            raise InvalidRedirectError(path, reason="Redirect URL is empty or too long")

        record = RedirectRecord(path=clean_path, url=url)
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.commit()
            await self.session.refresh(record)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(
                f"Failed to create redirect for {clean_path}: {str(e)}",
                original_error=e
            )

        logger.info(f"registered redirect {record.path} -> {record.url}")
        return record

    async def list_redirects(self) -> List[RedirectRecord]:
        """Return every stored redirect in match-priority order."""
        statement = select(RedirectRecord).order_by(RedirectRecord.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())
