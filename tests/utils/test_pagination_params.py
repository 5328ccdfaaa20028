"""Tests for cursor query-string parsing and navigation links."""

import logging
from datetime import UTC, datetime
from urllib.parse import parse_qs

import pytest

from showcase.models.pagination import BackwardCursor, ForwardCursor
from showcase.utils.pagination import (
    InvalidCursorError,
    next_page_query,
    page_request_from_params,
    parse_cursor,
    per_page_query,
    prev_page_query,
    reset_query,
)

PUBLISHED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def query_dict(query: str) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(query.lstrip("?")).items()}


class TestParseCursor:
    """Decoding the two cursor pairs."""

    def test_no_params_means_first_page(self):
        assert parse_cursor() is None

    def test_blank_params_are_ignored(self):
        assert parse_cursor(first_id="", first_published_at=" ") is None

    def test_last_pair_is_a_forward_cursor(self):
        cursor = parse_cursor(last_id="B", last_published_at="2024-01-01T12:00:00Z")

        assert cursor == ForwardCursor(last_id="B", last_published_at=PUBLISHED_AT)

    def test_first_pair_is_a_backward_cursor(self):
        cursor = parse_cursor(first_id="C", first_published_at="2024-01-01T13:00:00+01:00")

        assert cursor == BackwardCursor(first_id="C", first_published_at=PUBLISHED_AT)

    def test_naive_timestamp_is_taken_as_utc(self):
        cursor = parse_cursor(last_id="B", last_published_at="2024-01-01T12:00:00")

        assert cursor.last_published_at == PUBLISHED_AT

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"last_id": "B"},
            {"last_published_at": "2024-01-01T12:00:00Z"},
            {"first_id": "C"},
            {"first_published_at": "2024-01-01T12:00:00Z"},
        ],
    )
    def test_half_pair_is_rejected(self, kwargs):
        with pytest.raises(InvalidCursorError, match="Incomplete cursor"):
            parse_cursor(**kwargs)

    def test_invalid_timestamp_is_rejected(self):
        with pytest.raises(InvalidCursorError, match="lastPublishedAt"):
            parse_cursor(last_id="B", last_published_at="yesterday-ish")

    @pytest.mark.parametrize("value", ["12", "May", "1 Jan 2024 12:00", "2024/01/01"])
    def test_non_iso_timestamp_is_rejected(self, value):
        with pytest.raises(InvalidCursorError, match="lastPublishedAt"):
            parse_cursor(last_id="x", last_published_at=value)

    def test_both_pairs_prefer_backward_and_warn(self, caplog):
        with caplog.at_level(logging.WARNING):
            cursor = parse_cursor(
                first_id="C",
                first_published_at="2024-01-01T12:00:00Z",
                last_id="B",
                last_published_at="2024-01-01T12:00:00Z",
            )

        assert isinstance(cursor, BackwardCursor)
        assert "Both cursor pairs present" in caplog.text


class TestPageRequestFromParams:
    """Decoding a full query-parameter mapping."""

    def test_defaults_per_page(self):
        page_request = page_request_from_params({}, default_per_page=3)

        assert page_request.per_page == 3
        assert page_request.cursor is None

    def test_reads_per_page_and_cursor(self):
        page_request = page_request_from_params(
            {"perPage": "5", "lastId": "B", "lastPublishedAt": "2024-01-01T12:00:00Z"}
        )

        assert page_request.per_page == 5
        assert isinstance(page_request.cursor, ForwardCursor)

    def test_non_integer_per_page_is_rejected(self):
        with pytest.raises(ValueError, match="perPage must be an integer"):
            page_request_from_params({"perPage": "three"})


class TestNavigationQueries:
    """Query strings behind the Prev, Next, Reset and per-page buttons."""

    current = {
        "perPage": "2",
        "firstId": "C",
        "firstPublishedAt": "2024-01-01T12:00:00Z",
    }

    def test_next_sets_last_pair_and_clears_first_pair(self):
        cursor = ForwardCursor(last_id="D", last_published_at=PUBLISHED_AT)

        params = query_dict(next_page_query(self.current, cursor))

        assert params == {
            "perPage": "2",
            "lastId": "D",
            "lastPublishedAt": "2024-01-01T12:00:00Z",
        }

    def test_prev_sets_first_pair_and_clears_last_pair(self):
        current = {"lastId": "B", "lastPublishedAt": "2024-01-01T12:00:00Z"}
        cursor = BackwardCursor(first_id="C", first_published_at=PUBLISHED_AT)

        params = query_dict(prev_page_query(current, cursor))

        assert params == {"firstId": "C", "firstPublishedAt": "2024-01-01T12:00:00Z"}

    def test_reset_clears_cursors_and_per_page(self):
        assert reset_query({**self.current, "theme": "dark"}) == "?theme=dark"
        assert reset_query(self.current) == "?"

    def test_per_page_clears_cursors(self):
        assert query_dict(per_page_query(self.current, 8)) == {"perPage": "8"}
