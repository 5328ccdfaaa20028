"""
Structured error logging for store and request failures.

Errors logged here carry `component`, `operation`, `context_data` and
`http_details` extras, which the JSONL handlers in showcase/core/logging.py
write to logs/errors/ and logs/structured/.

Usage:
    from showcase.utils.error_logger import log_error, log_http_error

    log_error("paginator", error, operation="paginate", context={"per_page": 3})
    log_http_error("hosted_store", url="https://...", error=e, response=resp)
"""

from typing import Any

from showcase.core.logging import get_logger


def _extract_http_details(response: Any) -> dict[str, Any]:
    """Extract status, url, method and a truncated body from an HTTP response."""
    details: dict[str, Any] = {}

    try:
        if hasattr(response, "status_code"):
            details["status_code"] = response.status_code
        if hasattr(response, "url"):
            details["url"] = str(response.url)
        if hasattr(response, "request"):
            details["method"] = response.request.method
        if hasattr(response, "text"):
            details["response_body"] = response.text[:1000]
    except Exception as e:
        details["extraction_error"] = f"Failed to extract HTTP details: {e}"

    return details


def log_error(
    component: str,
    error: Exception,
    *,
    operation: str | None = None,
    context: dict[str, Any] | None = None,
    http_response: Any | None = None,
) -> None:
    """Log error with full context to both console and JSONL.

    Args:
        component: Component name for identifying the source of errors.
        error: The exception that occurred.
        operation: Name of the operation that failed.
        context: Additional context data.
        http_response: HTTP response object (if applicable).
    """
    logger = get_logger(f"error.{component}")

    http_details = _extract_http_details(http_response) if http_response is not None else None
    operation_str = f" during {operation}" if operation else ""

    logger.error(
        f"{component} error{operation_str}: {error}",
        exc_info=error,
        extra={
            "component": component,
            "operation": operation,
            "context_data": context,
            "http_details": http_details,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_http_error(
    component: str,
    url: str,
    *,
    response: Any | None = None,
    error: Exception | None = None,
    operation: str | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    """Log HTTP-specific errors with response details."""
    full_context = {"url": url}
    if context:
        full_context.update(context)

    if not error:
        status_code = getattr(response, "status_code", "unknown")
        error = Exception(f"HTTP error for {url} (status: {status_code})")

    log_error(
        component,
        error,
        operation=operation or "http_request",
        context=full_context,
        http_response=response,
    )
