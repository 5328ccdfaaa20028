"""Seed the local `lessons` table with demo lessons and optionally walk its pages."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sqlalchemy.orm import Session

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from showcase.core.db import get_db, get_session_factory, init_db  # noqa: E402
from showcase.core.logging import get_logger, setup_logging  # noqa: E402
from showcase.demo_data import generate_demo_lessons  # noqa: E402
from showcase.models.lesson import Lesson  # noqa: E402
from showcase.models.schema import LessonRow  # noqa: E402
from showcase.repositories.sql_store import SqlLessonStore  # noqa: E402
from showcase.services.paginator import CursorPaginator  # noqa: E402

logger = get_logger(__name__)


def seed_lessons(db: Session, lessons: list[Lesson], *, replace: bool = False) -> int:
    """Upsert lessons into the `lessons` table. Returns the number written."""
    if replace:
        deleted = db.query(LessonRow).delete()
        logger.info("Deleted %d existing lessons", deleted)

    for lesson in lessons:
        db.merge(LessonRow.from_lesson(lesson))
    db.flush()
    return len(lessons)


def walk_pages(paginator: CursorPaginator, per_page: int) -> list[list[str]]:
    """Follow next cursors from the first page to the last; returns ids per page."""
    pages: list[list[str]] = []
    result = paginator.paginate(None, per_page)
    pages.append([lesson.id for lesson in result.page])
    while result.has_next:
        result = paginator.paginate(result.next_cursor, per_page)
        pages.append([lesson.id for lesson in result.page])
    return pages


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--count", type=int, default=24, help="Number of lessons to create")
    parser.add_argument(
        "--tie-every",
        type=int,
        default=4,
        help="Every Nth lesson shares the previous timestamp (0 disables ties)",
    )
    parser.add_argument("--replace", action="store_true", help="Delete existing lessons first")
    parser.add_argument(
        "--walk",
        type=int,
        metavar="PER_PAGE",
        help="After seeding, print every page at this page size",
    )
    args = parser.parse_args(argv)

    setup_logging()
    init_db()

    with get_db() as db:
        written = seed_lessons(
            db, generate_demo_lessons(args.count, tie_every=args.tie_every), replace=args.replace
        )
    print(f"Seeded {written} lessons")

    if args.walk:
        paginator = CursorPaginator(SqlLessonStore(get_session_factory()))
        for number, ids in enumerate(walk_pages(paginator, args.walk), start=1):
            print(f"Page {number}: {', '.join(ids) or '(empty)'}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
