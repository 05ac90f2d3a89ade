"""
Structured-Config Redirector

Builds ASGI handlers from redirect documents: a YAML (or JSON) sequence of
records, each with a ``path`` and a ``url``:

    - path: /some-path
      url: https://www.some-url.com/demo

Entries are scanned in document order and the first entry whose path
equals the request path wins, so duplicate paths are allowed.

Building never fails outright. ``yaml_handler`` and ``json_handler``
return a ``BuildResult`` holding a usable handler together with the decode
error, if any. The handler serves whatever entries could be decoded: none
for a syntax error, the valid records when only some records are rejected.
"""

import logging
from datetime import date
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import from_json
from starlette.types import ASGIApp, Receive, Scope, Send

from urlshort.core.exceptions import RedirectConfigError
from urlshort.handlers.base import request_path, send_redirect

logger = logging.getLogger(__name__)

__all__ = [
    "RedirectEntry",
    "BuildResult",
    "entries_handler",
    "yaml_handler",
    "json_handler",
    "parse_yaml_entries",
    "parse_json_entries",
]


class RedirectEntry(BaseModel):
    """One redirect record of a structured document."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str = ""
    url: str = ""

    @field_validator("path", "url", mode="before")
    @classmethod
    def scalar_as_text(cls, value: Any) -> Any:
        """
        Read any scalar as its text: an empty value becomes "", booleans,
        numbers and dates become the string they were written as.
        Mappings and sequences are left for the str check to reject.
        """
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, date):
            return value.isoformat()
        return value


class BuildResult(NamedTuple):
    """
    Handler built from a redirect document, plus the decode error if the
    document was not fully usable.

    Unpacks as ``handler, error = yaml_handler(data, fallback)``.
    """
    handler: ASGIApp
    error: Optional[RedirectConfigError]

    def raise_for_error(self) -> ASGIApp:
        """Return the handler, or raise the decode error if there was one."""
        if self.error is not None:
            raise self.error
        return self.handler


ParseResult = Tuple[Tuple[RedirectEntry, ...], Optional[RedirectConfigError]]


def _decode_entries(document: Any, source: str) -> ParseResult:
    if document is None:
        return (), None

    if not isinstance(document, list):
        return (), RedirectConfigError(
            source,
            f"expected a sequence of redirect entries, got {type(document).__name__}"
        )

    entries: List[RedirectEntry] = []
    problems: List[str] = []
    for index, record in enumerate(document):
        try:
            entries.append(RedirectEntry.model_validate(record))
        except ValidationError as e:
            details = ", ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
                for err in e.errors()
            )
            problems.append(f"entry {index} ({details})")

    error = RedirectConfigError(source, "; ".join(problems)) if problems else None
    return tuple(entries), error


def parse_yaml_entries(data: bytes) -> ParseResult:
    """
    Decode a YAML redirect document.

    Returns:
        (entries, error) where error is None when every record decoded
    """
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        return (), RedirectConfigError("yaml", str(e))
    return _decode_entries(document, "yaml")


def parse_json_entries(data: bytes) -> ParseResult:
    """
    Decode a JSON redirect document (an array of {"path", "url"} objects).

    Returns:
        (entries, error) where error is None when every record decoded
    """
    try:
        document = from_json(data)
    except ValueError as e:
        return (), RedirectConfigError("json", str(e))
    return _decode_entries(document, "json")


def entries_handler(
    entries: Iterable[RedirectEntry],
    fallback: ASGIApp,
    source: str = "entries"
) -> ASGIApp:
    """
    Return an ASGI application redirecting the first entry whose path
    matches the request path, calling ``fallback`` when none does.

    Args:
        entries: Redirect entries in priority order
        fallback: Application invoked when no entry matches
        source: Name logged for requests this handler answers
    """
    redirects = tuple(entries)

    async def handler(scope: Scope, receive: Receive, send: Send) -> None:
        path = request_path(scope)
        if path is not None:
            for entry in redirects:
                if entry.path == path:
                    logger.debug(f"config redirect {path} -> {entry.url}")
                    await send_redirect(entry.url, source, scope, receive, send)
                    return
        await fallback(scope, receive, send)

    return handler


def yaml_handler(data: bytes, fallback: ASGIApp) -> BuildResult:
    """
    Parse a YAML redirect document and build a handler from it.

    Only invalid YAML (or records of the wrong shape) produce an error. The
    handler is returned in every case; on error it redirects only the
    entries that decoded, which may be none.

    Args:
        data: Raw YAML document
        fallback: Application invoked when no entry matches

    Returns:
        BuildResult(handler, error)
    """
    entries, error = parse_yaml_entries(data)
    return BuildResult(entries_handler(entries, fallback, "yaml"), error)


def json_handler(data: bytes, fallback: ASGIApp) -> BuildResult:
    """
    Parse a JSON redirect document and build a handler from it.

    Same contract as ``yaml_handler``.
    """
    entries, error = parse_json_entries(data)
    return BuildResult(entries_handler(entries, fallback, "json"), error)
