"""
Redirect handlers.

Each builder wraps a fallback ASGI application:

- map_handler: exact lookup in a path -> URL mapping
- yaml_handler / json_handler: first-match scan over a parsed document
- entries_handler: first-match scan over already-built entries
"""

from urlshort.handlers.mapping import map_handler
from urlshort.handlers.structured import (
    BuildResult,
    RedirectEntry,
    entries_handler,
    json_handler,
    parse_json_entries,
    parse_yaml_entries,
    yaml_handler,
)

__all__ = [
    "map_handler",
    "yaml_handler",
    "json_handler",
    "entries_handler",
    "parse_yaml_entries",
    "parse_json_entries",
    "BuildResult",
    "RedirectEntry",
]
