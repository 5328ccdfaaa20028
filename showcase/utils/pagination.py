"""Query-string handling for cursor pagination.

Cursors travel as plain query parameters so any page can be shared by URL:

    ?lastId=<id>&lastPublishedAt=<iso>      next (older) page
    ?firstId=<id>&firstPublishedAt=<iso>    previous (newer) page
    &perPage=<n>                            page size

Navigation always clears the opposite cursor pair, so at most one pair is
set at a time.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlencode

from showcase.core.logging import get_logger
from showcase.models.pagination import BackwardCursor, Cursor, ForwardCursor
from showcase.utils.dates import parse_timestamp

logger = get_logger(__name__)

FIRST_CURSOR_PARAMS = ("firstId", "firstPublishedAt")
LAST_CURSOR_PARAMS = ("lastId", "lastPublishedAt")
CURSOR_PARAMS = FIRST_CURSOR_PARAMS + LAST_CURSOR_PARAMS
PER_PAGE_PARAM = "perPage"


class InvalidCursorError(ValueError):
    """Cursor query parameters are incomplete or malformed."""


@dataclass(frozen=True)
class PageRequest:
    """Cursor and page size decoded from one request."""

    cursor: Cursor
    per_page: int


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _parse_pair(id_param: str, timestamp_param: str, id_value, timestamp_value):
    """Return `(id, datetime)` for a complete pair, None for an absent one."""
    if _blank(id_value) and _blank(timestamp_value):
        return None
    if _blank(id_value) or _blank(timestamp_value):
        missing = id_param if _blank(id_value) else timestamp_param
        raise InvalidCursorError(f"Incomplete cursor: {missing} is required")

    published_at = parse_timestamp(timestamp_value, strict=True)
    if published_at is None:
        raise InvalidCursorError(f"Invalid {timestamp_param}: {timestamp_value!r}")
    return id_value, published_at


def parse_cursor(
    first_id: str | None = None,
    first_published_at: str | None = None,
    last_id: str | None = None,
    last_published_at: str | None = None,
) -> Cursor:
    """Decode the two cursor pairs into a single cursor.

    Raises:
        InvalidCursorError: If a pair is half-specified or its timestamp is invalid.
    """
    first = _parse_pair(*FIRST_CURSOR_PARAMS, first_id, first_published_at)
    last = _parse_pair(*LAST_CURSOR_PARAMS, last_id, last_published_at)

    if first and last:
        logger.warning(
            "Both cursor pairs present; using the first (backward) pair",
            extra={
                "component": "pagination_params",
                "operation": "parse_cursor",
                "context_data": {"first_id": first[0], "last_id": last[0]},
            },
        )
    if first:
        return BackwardCursor(first_id=first[0], first_published_at=first[1])
    if last:
        return ForwardCursor(last_id=last[0], last_published_at=last[1])
    return None


def page_request_from_params(params: Mapping[str, str], default_per_page: int = 3) -> PageRequest:
    """Decode cursor and page size from a mapping of query parameters.

    Raises:
        InvalidCursorError: For malformed cursor parameters.
        ValueError: If perPage is not an integer.
    """
    raw_per_page = params.get(PER_PAGE_PARAM)
    if _blank(raw_per_page):
        per_page = default_per_page
    else:
        try:
            per_page = int(raw_per_page)
        except ValueError as e:
            raise ValueError(f"perPage must be an integer, got {raw_per_page!r}") from e

    cursor = parse_cursor(*(params.get(name) for name in CURSOR_PARAMS))
    return PageRequest(cursor=cursor, per_page=per_page)


def _query_string(params: dict[str, str]) -> str:
    return f"?{urlencode(params)}" if params else "?"


def next_page_query(current: Mapping[str, str], next_cursor: ForwardCursor) -> str:
    params = {k: v for k, v in current.items() if k not in FIRST_CURSOR_PARAMS}
    params.update(next_cursor.to_params())
    return _query_string(params)


def prev_page_query(current: Mapping[str, str], prev_cursor: BackwardCursor) -> str:
    params = {k: v for k, v in current.items() if k not in LAST_CURSOR_PARAMS}
    params.update(prev_cursor.to_params())
    return _query_string(params)


def reset_query(current: Mapping[str, str]) -> str:
    params = {
        k: v for k, v in current.items() if k not in CURSOR_PARAMS and k != PER_PAGE_PARAM
    }
    return _query_string(params)


def per_page_query(current: Mapping[str, str], per_page: int) -> str:
    params = {k: v for k, v in current.items() if k not in CURSOR_PARAMS}
    params[PER_PAGE_PARAM] = str(per_page)
    return _query_string(params)
