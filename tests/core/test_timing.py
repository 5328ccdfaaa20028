"""Tests for the timed() context manager."""

import logging

import pytest

from showcase.core import timing
from showcase.core.timing import timed


def timing_records(caplog):
    return [record for record in caplog.records if record.name == "showcase.core.timing"]


def test_timed_logs_context_and_duration(caplog):
    with caplog.at_level(logging.DEBUG, logger="showcase.core.timing"):
        with timed("fetch_lessons", variant="forward", limit=4) as details:
            details["fetched"] = 3

    record = timing_records(caplog)[-1]
    assert record.operation == "fetch_lessons"
    assert record.component == "timing"
    assert record.context_data["variant"] == "forward"
    assert record.context_data["fetched"] == 3
    assert "duration_ms" in record.context_data
    assert "limit=4" in record.getMessage()


def test_timed_logs_when_block_raises(caplog):
    with caplog.at_level(logging.DEBUG, logger="showcase.core.timing"):
        with pytest.raises(RuntimeError):
            with timed("fetch_lessons"):
                raise RuntimeError("store down")

    assert timing_records(caplog)[-1].operation == "fetch_lessons"


def test_slow_blocks_log_a_warning(monkeypatch, caplog):
    monkeypatch.setattr(timing, "VERY_SLOW_MS", -1)
    monkeypatch.setattr(timing, "SLOW_MS", -1)

    with caplog.at_level(logging.DEBUG, logger="showcase.core.timing"):
        with timed("fetch_lessons"):
            pass

    assert timing_records(caplog)[-1].levelno == logging.WARNING
    assert "very slow" in timing_records(caplog)[-1].getMessage()


def test_paginator_records_fetched_count(caplog, paginator):
    with caplog.at_level(logging.DEBUG, logger="showcase.core.timing"):
        paginator.paginate(None, 2)

    details = timing_records(caplog)[-1].context_data
    assert details["variant"] == "none"
    assert details["limit"] == 3
    assert details["fetched"] == 3
