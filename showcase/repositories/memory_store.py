"""In-memory lesson store, used for tests and the `memory` backend."""

from collections.abc import Iterable, Mapping
from typing import Any

from showcase.core.logging import get_logger
from showcase.models.lesson import Lesson
from showcase.repositories.base import LessonQuery, SortOrder

logger = get_logger(__name__)


class InMemoryLessonStore:
    """Evaluates lesson queries against a fixed list of lessons."""

    def __init__(self, lessons: Iterable[Lesson] = (), document_type: str = "lesson"):
        self.document_type = document_type
        self._lessons = list(lessons)
        self.queries: list[LessonQuery] = []

    @classmethod
    def from_documents(
        cls, documents: Iterable[Mapping[str, Any]], document_type: str = "lesson"
    ) -> "InMemoryLessonStore":
        """Build a store from raw store documents.

        Documents of another `_type` or without `publishedAt` are left out.
        """
        lessons = []
        for doc in documents:
            if doc.get("_type", document_type) != document_type:
                continue
            if doc.get("publishedAt") is None:
                logger.debug("Skipping document %s without publishedAt", doc.get("_id"))
                continue
            lessons.append(Lesson.model_validate(doc))
        return cls(lessons, document_type=document_type)

    def __len__(self) -> int:
        return len(self._lessons)

    def fetch(self, query: LessonQuery) -> list[Lesson]:
        self.queries.append(query)
        if query.document_type != self.document_type:
            return []

        matches = [
            lesson
            for lesson in self._lessons
            if query.boundary is None or query.boundary.admits(lesson)
        ]
        matches.sort(key=lambda lesson: lesson.sort_key, reverse=query.order is SortOrder.DESC)
        return matches[: query.limit]
