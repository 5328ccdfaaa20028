from datetime import datetime

from sqlalchemy import Column, DateTime, Index, String

from showcase.core.db import Base
from showcase.models.lesson import Lesson
from showcase.utils.dates import parse_timestamp, to_naive_utc


class LessonRow(Base):
    __tablename__ = "lessons"

    # Store identifiers are strings, compared lexicographically
    id = Column(String(128), primary_key=True)
    document_type = Column(String(50), nullable=False, default="lesson", index=True)
    title = Column(String(500), nullable=True)

    # Naive UTC; rows without a publication date never paginate
    published_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (Index("idx_lessons_published_at_id", "published_at", "id"),)

    def to_lesson(self) -> Lesson:
        return Lesson(id=self.id, title=self.title, published_at=parse_timestamp(self.published_at))

    @classmethod
    def from_lesson(cls, lesson: Lesson, document_type: str = "lesson") -> "LessonRow":
        return cls(
            id=lesson.id,
            document_type=document_type,
            title=lesson.title,
            published_at=to_naive_utc(lesson.published_at),
        )
