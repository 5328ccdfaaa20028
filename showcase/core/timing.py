"""Timing utilities for profiling store fetches."""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from showcase.core.logging import get_logger

logger = get_logger(__name__)

# Store round trips slower than these are flagged
SLOW_MS = 50
VERY_SLOW_MS = 200


@contextmanager
def timed(operation: str, **context: Any) -> Generator[dict[str, Any]]:
    """Time a block and log it as a structured record.

    Yields a dict of context fields; the block may add to it (e.g. how many
    lessons came back) before the timing line is written.

    Usage:
        with timed("fetch_lessons", variant="forward", limit=4) as details:
            lessons = store.fetch(query)
            details["fetched"] = len(lessons)
    """
    details = dict(context)
    start = time.perf_counter()
    try:
        yield details
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        details["duration_ms"] = round(duration_ms, 2)
        summary = " ".join(f"{key}={value}" for key, value in details.items())
        extra = {"component": "timing", "operation": operation, "context_data": details}

        if duration_ms < SLOW_MS:
            logger.debug("%s %s", operation, summary, extra=extra)
        elif duration_ms < VERY_SLOW_MS:
            logger.info("%s %s (slow)", operation, summary, extra=extra)
        else:
            logger.warning("%s %s (very slow)", operation, summary, extra=extra)
