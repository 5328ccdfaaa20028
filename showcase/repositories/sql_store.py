"""SQLAlchemy-backed lesson store for local development."""

from collections.abc import Callable

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query, Session

from showcase.models.lesson import Lesson
from showcase.models.schema import LessonRow
from showcase.repositories.base import Boundary, Comparison, LessonQuery, SortOrder
from showcase.utils.dates import to_naive_utc


def apply_boundary(query: Query, boundary: Boundary | None) -> Query:
    """Apply a `(published_at, id)` keyset boundary to a query."""
    if boundary is None:
        return query

    published_at = to_naive_utc(boundary.published_at)
    if boundary.comparison is Comparison.NEWER:
        return query.filter(
            or_(
                LessonRow.published_at > published_at,
                and_(LessonRow.published_at == published_at, LessonRow.id > boundary.id),
            )
        )
    return query.filter(
        or_(
            LessonRow.published_at < published_at,
            and_(LessonRow.published_at == published_at, LessonRow.id < boundary.id),
        )
    )


def apply_order(query: Query, order: SortOrder) -> Query:
    if order is SortOrder.ASC:
        return query.order_by(LessonRow.published_at.asc(), LessonRow.id.asc())
    return query.order_by(LessonRow.published_at.desc(), LessonRow.id.desc())


class SqlLessonStore:
    """Runs lesson queries against the `lessons` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def fetch(self, query: LessonQuery) -> list[Lesson]:
        with self._session_factory() as db:
            rows = (
                db.query(LessonRow)
                .filter(LessonRow.document_type == query.document_type)
                # Sorting on NULL timestamps is undefined across backends
                .filter(LessonRow.published_at.is_not(None))
            )
            rows = apply_boundary(rows, query.boundary)
            rows = apply_order(rows, query.order)
            return [row.to_lesson() for row in rows.limit(query.limit).all()]
