"""
Input Validators

Validation for redirects submitted through the management API. Redirects
loaded from configuration documents are taken verbatim and never pass
through here.
"""

from typing import Optional

MAX_PATH_LENGTH = 512
MAX_URL_LENGTH = 2048


def sanitize_redirect_path(path: str) -> Optional[str]:
    """
    Validate the path a redirect is registered under.

    The path is matched verbatim against incoming request paths, so it
    must be absolute and must not carry a query string or fragment.

    Args:
        path: The request path to register

    Returns:
        The path with surrounding whitespace removed, or None if invalid
    """
    if not path or not isinstance(path, str):
        return None

    path = path.strip()

    if not path.startswith("/") or len(path) > MAX_PATH_LENGTH:
        return None

    if any(char in path for char in "?# "):
        return None

    return path


def validate_url_length(url: str, max_length: int = MAX_URL_LENGTH) -> bool:
    """
    Validate URL length.

    Args:
        url: The URL to validate
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        True if URL length is valid, False otherwise
    """
    return bool(url) and len(url) <= max_length
