"""
Custom Exceptions

This module defines the exceptions raised (or returned) by the redirect
service.

- RedirectConfigError: a redirect document could not be decoded
- InvalidRedirectError: the management API received an unusable redirect
- DatabaseError: a database operation failed
"""

from typing import Optional


class URLShortException(Exception):
    """Base exception for the redirect service."""
    pass


class RedirectConfigError(URLShortException):
    """
    Raised (or returned alongside a handler) when a redirect document
    cannot be decoded.

    Attributes:
        source: Document format that failed, e.g. "yaml" or "json"
        reason: Parser or validation message
    """

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid {source} redirect config: {reason}")


class InvalidRedirectError(URLShortException):
    """Raised when a redirect submitted to the API fails validation."""

    def __init__(self, path: str, reason: str = "Invalid redirect path"):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class DatabaseError(URLShortException):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
