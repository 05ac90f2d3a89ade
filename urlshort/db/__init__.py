"""
Storage for redirects registered through the management API.
"""

from urlshort.db.session import async_session_maker, create_redirect_engine, engine, get_session

__all__ = [
    "async_session_maker",
    "create_redirect_engine",
    "engine",
    "get_session",
]
