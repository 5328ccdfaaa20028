"""Cursor variants and the result of a pagination request."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from showcase.models.lesson import Lesson
from showcase.utils.dates import format_timestamp


class CursorVariant(str, Enum):
    """Which cursor, if any, a request carried."""

    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class ForwardCursor:
    """Records strictly older than `(last_published_at, last_id)`."""

    last_id: str
    last_published_at: datetime

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "ForwardCursor":
        return cls(last_id=lesson.id, last_published_at=lesson.published_at)

    def to_params(self) -> dict[str, str]:
        return {
            "lastId": self.last_id,
            "lastPublishedAt": format_timestamp(self.last_published_at),
        }


@dataclass(frozen=True)
class BackwardCursor:
    """Records strictly newer than `(first_published_at, first_id)`."""

    first_id: str
    first_published_at: datetime

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "BackwardCursor":
        return cls(first_id=lesson.id, first_published_at=lesson.published_at)

    def to_params(self) -> dict[str, str]:
        return {
            "firstId": self.first_id,
            "firstPublishedAt": format_timestamp(self.first_published_at),
        }


Cursor = ForwardCursor | BackwardCursor | None


def cursor_variant(cursor: Cursor) -> CursorVariant:
    if isinstance(cursor, BackwardCursor):
        return CursorVariant.BACKWARD
    if isinstance(cursor, ForwardCursor):
        return CursorVariant.FORWARD
    return CursorVariant.NONE


@dataclass(frozen=True)
class PaginationResult:
    """One page of lessons plus the cursors to its neighbours."""

    page: list[Lesson]
    per_page: int
    has_prev: bool = False
    has_next: bool = False
    prev_cursor: BackwardCursor | None = None
    next_cursor: ForwardCursor | None = None
