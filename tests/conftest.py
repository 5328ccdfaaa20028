import os
import sys
import tempfile
from datetime import UTC, datetime, timedelta

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Settings are cached on first use, so configure them before importing the app
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="showcase-logs-"))
os.environ.setdefault("STORE_BACKEND", "memory")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from showcase.core.db import Base  # noqa: E402
from showcase.models import schema  # noqa: E402,F401
from showcase.models.lesson import Lesson  # noqa: E402
from showcase.repositories.memory_store import InMemoryLessonStore  # noqa: E402
from showcase.services.paginator import CursorPaginator  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def _make_lessons(ids: list[str], *, same_time: bool = False) -> list[Lesson]:
    """Build lessons whose order in `ids` is newest first."""
    count = len(ids)
    return [
        Lesson(
            id=lesson_id,
            title=f"Lesson {lesson_id}",
            published_at=BASE_TIME if same_time else BASE_TIME + timedelta(hours=count - index),
        )
        for index, lesson_id in enumerate(ids)
    ]


@pytest.fixture
def lesson_factory():
    """Factory building lessons from ids listed newest first."""
    return _make_lessons


@pytest.fixture
def five_lessons():
    """Lessons A..E, A newest."""
    return _make_lessons(["A", "B", "C", "D", "E"])


@pytest.fixture
def memory_store(five_lessons):
    return InMemoryLessonStore(five_lessons)


@pytest.fixture
def paginator(memory_store):
    return CursorPaginator(memory_store)


@pytest.fixture
def test_db():
    """Create a test database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(test_db):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_db)


@pytest.fixture
def db_session(session_factory):
    """Create a test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client_store(memory_store):
    """Store served by the test client; override to change the dataset."""
    return memory_store


@pytest.fixture
def client(client_store):
    """Create a test client with the lesson store overridden."""
    from showcase.core.deps import get_lesson_store
    from showcase.main import app

    app.dependency_overrides[get_lesson_store] = lambda: client_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
