"""Deterministic demo lessons for the `memory` and `sql` backends."""

from datetime import UTC, datetime, timedelta

from showcase.models.lesson import Lesson

DEMO_START = datetime(2023, 10, 1, 9, 0, tzinfo=UTC)


def generate_demo_lessons(
    count: int = 24, *, tie_every: int = 4, start: datetime = DEMO_START
) -> list[Lesson]:
    """Build `count` lessons one day apart, newest last.

    Every `tie_every`-th lesson reuses the previous lesson's timestamp so the
    id tie-break is exercised. `tie_every=0` disables ties.
    """
    lessons: list[Lesson] = []
    published_at = start
    for index in range(count):
        if index and not (tie_every and index % tie_every == 0):
            published_at = published_at + timedelta(days=1)
        lessons.append(
            Lesson(
                id=f"lesson-{index:03d}",
                title=f"Lesson {index + 1}",
                published_at=published_at,
            )
        )
    return lessons
