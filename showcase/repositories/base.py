"""Store-neutral description of a windowed lesson fetch."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from showcase.models.lesson import Lesson


class StoreError(Exception):
    """A lesson store could not answer a query."""


class SortOrder(str, Enum):
    """Order applied to both `publishedAt` and `_id`."""

    ASC = "asc"
    DESC = "desc"


class Comparison(str, Enum):
    """Which side of a boundary record a query selects."""

    OLDER = "older"
    NEWER = "newer"


@dataclass(frozen=True)
class Boundary:
    """A `(published_at, id)` point records are compared against.

    Equal timestamps fall back to the id, compared in the same direction as
    the timestamp, so no record sits on both sides of a boundary.
    """

    id: str
    published_at: datetime
    comparison: Comparison

    def admits(self, lesson: Lesson) -> bool:
        point = (self.published_at, self.id)
        if self.comparison is Comparison.NEWER:
            return lesson.sort_key > point
        return lesson.sort_key < point


@dataclass(frozen=True)
class LessonQuery:
    """Filter, order and limit for one fetch."""

    order: SortOrder
    limit: int
    boundary: Boundary | None = None
    document_type: str = "lesson"


class LessonStore(Protocol):
    """Anything that can answer a `LessonQuery` in the requested order."""

    def fetch(self, query: LessonQuery) -> list[Lesson]: ...
