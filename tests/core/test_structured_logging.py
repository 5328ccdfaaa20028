"""Tests for structured logging payloads, filters and formatters."""

import logging

from showcase.core.logging import (
    _build_error_json_payload,
    _build_structured_json_payload,
    _ConsoleStructuredFormatter,
    _redact_value,
    _StructuredLogFilter,
)


def make_record(msg="Structured log", level=logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test_file.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestStructuredLogging:
    """Tests for structured logging payloads and filters."""

    def test_structured_payload_merges_extra_fields(self):
        record = make_record()
        record.per_page = 3
        record.context_data = {"variant": "forward"}

        payload = _build_structured_json_payload(record)

        assert payload["context_data"]["variant"] == "forward"
        assert payload["context_data"]["per_page"] == 3
        assert payload["component"] == "test.logger"

    def test_structured_log_filter(self):
        filter_instance = _StructuredLogFilter()

        assert filter_instance.filter(make_record("Plain log")) is False

        record = make_record()
        record.operation = "paginate"
        assert filter_instance.filter(record) is True

    def test_error_payload_includes_stack_trace(self):
        try:
            raise RuntimeError("store exploded")
        except RuntimeError as e:
            record = make_record("failed", level=logging.ERROR, exc_info=(type(e), e, e.__traceback__))

        payload = _build_error_json_payload(record)

        assert payload["error_type"] == "RuntimeError"
        assert payload["error_message"] == "store exploded"
        assert "Traceback" in payload["stack_trace"]


class TestRedaction:
    """Secrets never reach the JSONL files."""

    def test_redacts_sensitive_keys_and_bearer_tokens(self):
        value = {
            "Authorization": "Bearer abc",
            "content_token": "sk-123",
            "nested": [{"note": "sent Bearer xyz.123 upstream"}],
            "dataset": "production",
        }

        redacted = _redact_value(value)

        assert redacted["Authorization"] == "<redacted>"
        assert redacted["content_token"] == "<redacted>"
        assert redacted["nested"][0]["note"] == "sent Bearer <redacted> upstream"
        assert redacted["dataset"] == "production"


class TestConsoleStructuredFormatter:
    """Tests for console formatter structured metadata output."""

    def test_plain_record_has_no_structured_suffix(self):
        formatter = _ConsoleStructuredFormatter("%(message)s")

        assert formatter.format(make_record("hello")) == "hello"

    def test_component_and_operation_suffix(self):
        formatter = _ConsoleStructuredFormatter("%(message)s")
        record = make_record("hello")
        record.component = "paginator"
        record.operation = "paginate"

        assert formatter.format(record) == "hello [paginator.paginate]"
