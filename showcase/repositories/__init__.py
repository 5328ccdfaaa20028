"""Lesson stores: the ordered data sources the paginator queries."""

from showcase.repositories.base import (
    Boundary,
    Comparison,
    LessonQuery,
    LessonStore,
    SortOrder,
    StoreError,
)

__all__ = [
    "Boundary",
    "Comparison",
    "LessonQuery",
    "LessonStore",
    "SortOrder",
    "StoreError",
]
