"""
API Request and Response Schemas

Pydantic models for the redirect management endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

_http_url = TypeAdapter(HttpUrl)


class CreateRedirectRequest(BaseModel):
    """Request model for registering a redirect."""
    path: str = Field(..., description="Request path to redirect, e.g. /docs")
    url: str = Field(..., description="Redirect target, an http(s) URL")

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, value: str) -> str:
        """Check the URL is an http(s) URL but keep it as submitted."""
        try:
            _http_url.validate_python(value)
        except ValidationError as e:
            raise ValueError(e.errors()[0]["msg"])
        return value


class RedirectRecordResponse(BaseModel):
    """A stored redirect."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    path: str
    url: str
    created_at: datetime


class RedirectListResponse(BaseModel):
    """All stored redirects, in match-priority order."""
    redirects: list[RedirectRecordResponse]
    count: int
