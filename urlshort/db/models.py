"""
Database Models for the Redirect Service

- RedirectRecord: a redirect registered through the management API

Lookups go by path and take the lowest id, so records behave like the
entries of a redirect document: the earliest registration of a path wins.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlmodel import Column, Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RedirectRecord(SQLModel, table=True):
    """
    Redirect managed through the API.

    Fields:
    - id: Auto-incrementing primary key (also the match priority)
    - path: Request path, matched verbatim
    - url: Redirect target
    - created_at: When the redirect was registered

    Indexes:
    - path: Non-unique index for the per-request lookup
    """
    __tablename__ = "redirects"

    id: Optional[int] = Field(default=None, primary_key=True)
    path: str = Field(
        sa_column=Column(String(512), nullable=False, index=True),
        max_length=512
    )
    url: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
