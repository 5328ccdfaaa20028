"""FastAPI dependencies wiring the lesson store into the paginator."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from showcase.core.db import get_session_factory
from showcase.core.logging import get_logger
from showcase.core.settings import Settings, get_settings
from showcase.demo_data import generate_demo_lessons
from showcase.repositories.base import LessonStore
from showcase.repositories.hosted_store import HostedContentStore
from showcase.repositories.memory_store import InMemoryLessonStore
from showcase.repositories.sql_store import SqlLessonStore
from showcase.services.paginator import CursorPaginator

logger = get_logger(__name__)


def build_lesson_store(settings: Settings) -> LessonStore:
    """Construct the store selected by `settings.store_backend`."""
    logger.info(
        "Using %s lesson store",
        settings.store_backend,
        extra={
            "component": "deps",
            "operation": "build_lesson_store",
            "context_data": {"backend": settings.store_backend},
        },
    )
    if settings.store_backend == "memory":
        return InMemoryLessonStore(
            generate_demo_lessons(), document_type=settings.content_document_type
        )
    if settings.store_backend == "sql":
        return SqlLessonStore(get_session_factory())
    return HostedContentStore.from_settings(settings)


@lru_cache
def _shared_lesson_store() -> LessonStore:
    return build_lesson_store(get_settings())


def get_lesson_store() -> LessonStore:
    """Process-wide store instance; override in tests."""
    return _shared_lesson_store()


def get_paginator(
    store: Annotated[LessonStore, Depends(get_lesson_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CursorPaginator:
    return CursorPaginator(store, document_type=settings.content_document_type)


def close_lesson_store() -> None:
    """Release the shared store's resources, if one was ever built."""
    if _shared_lesson_store.cache_info().currsize == 0:
        return
    store = _shared_lesson_store()
    close = getattr(store, "close", None)
    if close is not None:
        close()
        logger.info("Closed %s", type(store).__name__)
    _shared_lesson_store.cache_clear()
