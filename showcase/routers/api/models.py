"""Pydantic models for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from showcase.models.lesson import Lesson
from showcase.models.pagination import BackwardCursor, ForwardCursor, PaginationResult
from showcase.utils.dates import format_timestamp


class LessonResponse(BaseModel):
    """A single lesson as shown on the page."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Lesson identifier")
    title: str | None = Field(None, description="Lesson title")
    published_at: str = Field(
        ..., alias="publishedAt", description="Publication timestamp (UTC, ISO-8601)"
    )

    @classmethod
    def from_lesson(cls, lesson: Lesson) -> "LessonResponse":
        return cls(
            id=lesson.id, title=lesson.title, published_at=format_timestamp(lesson.published_at)
        )


class PrevCursorResponse(BaseModel):
    """Boundary of the previous (newer) page."""

    model_config = ConfigDict(populate_by_name=True)

    first_id: str = Field(..., alias="firstId")
    first_published_at: str = Field(..., alias="firstPublishedAt")

    @classmethod
    def from_cursor(cls, cursor: BackwardCursor) -> "PrevCursorResponse":
        return cls(
            first_id=cursor.first_id,
            first_published_at=format_timestamp(cursor.first_published_at),
        )


class NextCursorResponse(BaseModel):
    """Boundary of the next (older) page."""

    model_config = ConfigDict(populate_by_name=True)

    last_id: str = Field(..., alias="lastId")
    last_published_at: str = Field(..., alias="lastPublishedAt")

    @classmethod
    def from_cursor(cls, cursor: ForwardCursor) -> "NextCursorResponse":
        return cls(
            last_id=cursor.last_id,
            last_published_at=format_timestamp(cursor.last_published_at),
        )


class LessonPageResponse(BaseModel):
    """One page of lessons with navigation cursors."""

    lessons: list[LessonResponse] = Field(..., description="Lessons, newest first")
    per_page: int = Field(..., alias="perPage", description="Requested page size")
    has_prev: bool = Field(..., alias="hasPrev")
    prev_cursor: PrevCursorResponse | None = Field(None, alias="prevCursor")
    has_next: bool = Field(..., alias="hasNext")
    next_cursor: NextCursorResponse | None = Field(None, alias="nextCursor")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "lessons": [
                    {
                        "_id": "lesson-002",
                        "title": "Lesson 3",
                        "publishedAt": "2023-10-03T09:00:00Z",
                    }
                ],
                "perPage": 1,
                "hasPrev": True,
                "prevCursor": {
                    "firstId": "lesson-002",
                    "firstPublishedAt": "2023-10-03T09:00:00Z",
                },
                "hasNext": True,
                "nextCursor": {
                    "lastId": "lesson-002",
                    "lastPublishedAt": "2023-10-03T09:00:00Z",
                },
            }
        },
    )

    @classmethod
    def from_result(cls, result: PaginationResult) -> "LessonPageResponse":
        return cls(
            lessons=[LessonResponse.from_lesson(lesson) for lesson in result.page],
            per_page=result.per_page,
            has_prev=result.has_prev,
            prev_cursor=PrevCursorResponse.from_cursor(result.prev_cursor)
            if result.prev_cursor
            else None,
            has_next=result.has_next,
            next_cursor=NextCursorResponse.from_cursor(result.next_cursor)
            if result.next_cursor
            else None,
        )
