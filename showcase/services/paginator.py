"""
Cursor pagination over lessons ordered by `publishedAt desc, _id desc`.

A page request carries at most one cursor:

- no cursor: the newest `per_page` lessons
- ForwardCursor (Next / Older): lessons strictly older than the last lesson
  of the current page
- BackwardCursor (Prev / Newer): lessons strictly newer than the first lesson
  of the current page

Every fetch asks the store for `per_page + 1` lessons. The extra lesson only
signals that another page exists in the scanned direction and is trimmed
before the page is returned. Backward requests scan ascending from the
boundary so that the lessons nearest to it come first, then the batch is put
back into newest-to-oldest order.
"""

from showcase.core.logging import get_logger
from showcase.core.timing import timed
from showcase.models.lesson import Lesson
from showcase.models.pagination import (
    BackwardCursor,
    Cursor,
    CursorVariant,
    ForwardCursor,
    PaginationResult,
    cursor_variant,
)
from showcase.repositories.base import Boundary, Comparison, LessonQuery, LessonStore, SortOrder

logger = get_logger(__name__)


class InvalidPageSizeError(ValueError):
    """Page size is not a positive integer."""


# (cursor variant, overfetch occurred) -> (has_prev, has_next)
PAGE_FLAGS: dict[tuple[CursorVariant, bool], tuple[bool, bool]] = {
    (CursorVariant.NONE, False): (False, False),
    (CursorVariant.NONE, True): (False, True),
    # Forward requests always come from a newer page
    (CursorVariant.FORWARD, False): (True, False),
    (CursorVariant.FORWARD, True): (True, True),
    # Backward requests always come from an older page
    (CursorVariant.BACKWARD, False): (False, True),
    (CursorVariant.BACKWARD, True): (True, True),
}


def validate_per_page(per_page: int) -> int:
    if isinstance(per_page, bool) or not isinstance(per_page, int):
        raise InvalidPageSizeError(f"perPage must be an integer, got {per_page!r}")
    if per_page < 1:
        raise InvalidPageSizeError(f"perPage must be at least 1, got {per_page}")
    return per_page


def build_query(cursor: Cursor, per_page: int, document_type: str = "lesson") -> LessonQuery:
    """Build the store query for a cursor: direction, boundary and overfetch limit."""
    limit = per_page + 1

    if isinstance(cursor, BackwardCursor):
        return LessonQuery(
            order=SortOrder.ASC,
            limit=limit,
            boundary=Boundary(cursor.first_id, cursor.first_published_at, Comparison.NEWER),
            document_type=document_type,
        )
    if isinstance(cursor, ForwardCursor):
        return LessonQuery(
            order=SortOrder.DESC,
            limit=limit,
            boundary=Boundary(cursor.last_id, cursor.last_published_at, Comparison.OLDER),
            document_type=document_type,
        )
    return LessonQuery(order=SortOrder.DESC, limit=limit, document_type=document_type)


def trim_page(batch: list[Lesson], per_page: int, variant: CursorVariant) -> list[Lesson]:
    """Order a fetched batch newest-to-oldest and drop the overfetched lesson(s).

    The overfetched lesson is the one farthest from the boundary in scan
    direction: the oldest for descending scans, the newest for ascending ones.
    """
    page = sorted(batch, key=lambda lesson: lesson.sort_key, reverse=True)
    if len(page) <= per_page:
        return page
    if variant is CursorVariant.BACKWARD:
        return page[-per_page:]
    return page[:per_page]


class CursorPaginator:
    """Pages through the lessons of one store.

    The store is passed in explicitly so callers decide which backend (hosted,
    SQL or in-memory) serves the request.
    """

    def __init__(self, store: LessonStore, document_type: str = "lesson"):
        self.store = store
        self.document_type = document_type

    def paginate(self, cursor: Cursor, per_page: int) -> PaginationResult:
        """
        Fetch one page of lessons.

        Args:
            cursor: ForwardCursor, BackwardCursor or None for the first page.
            per_page: Page size, at least 1.

        Returns:
            PaginationResult with the page in newest-to-oldest order.

        Raises:
            InvalidPageSizeError: If per_page is not a positive integer.
            StoreError: Propagated unchanged from the store.
        """
        validate_per_page(per_page)
        variant = cursor_variant(cursor)
        query = build_query(cursor, per_page, self.document_type)

        with timed("fetch_lessons", variant=variant.value, limit=query.limit) as details:
            batch = self.store.fetch(query)
            details["fetched"] = len(batch)

        overfetched = len(batch) > per_page
        page = trim_page(batch, per_page, variant)

        if not page:
            # No boundary lesson to build cursors from
            has_prev, has_next = False, False
        else:
            has_prev, has_next = PAGE_FLAGS[(variant, overfetched)]

        result = PaginationResult(
            page=page,
            per_page=per_page,
            has_prev=has_prev,
            has_next=has_next,
            prev_cursor=BackwardCursor.from_lesson(page[0]) if has_prev else None,
            next_cursor=ForwardCursor.from_lesson(page[-1]) if has_next else None,
        )

        logger.info(
            "Paginated %d lessons (%s cursor, per_page=%d)",
            len(page),
            variant.value,
            per_page,
            extra={
                "component": "paginator",
                "operation": "paginate",
                "context_data": {
                    "variant": variant.value,
                    "per_page": per_page,
                    "fetched": len(batch),
                    "has_prev": has_prev,
                    "has_next": has_next,
                },
            },
        )
        return result
