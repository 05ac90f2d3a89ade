"""
Path-based redirection for ASGI applications.

    from urlshort import map_handler, yaml_handler

    app = map_handler({"/docs": "https://example.com/docs"}, fallback_app)
    app, error = yaml_handler(document, app)
"""

__version__ = "1.0.0"

from urlshort.handlers import (  # noqa: E402
    BuildResult,
    RedirectEntry,
    entries_handler,
    json_handler,
    map_handler,
    yaml_handler,
)

__all__ = [
    "__version__",
    "map_handler",
    "yaml_handler",
    "json_handler",
    "entries_handler",
    "BuildResult",
    "RedirectEntry",
]
