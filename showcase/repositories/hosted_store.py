"""
Lesson store backed by a hosted content store's HTTP query API.

Queries are written in GROQ and sent with bound parameters:

    GET https://<project>.apicdn.sanity.io/v<api version>/data/query/<dataset>
        ?query=*[...]&$documentType="lesson"&$limit=4&perspective=published

The response body is `{"result": [...documents...], "ms": ...}`.
"""

import json
from typing import Any

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from showcase.core.logging import get_logger
from showcase.core.settings import Settings
from showcase.models.lesson import Lesson
from showcase.repositories.base import Comparison, LessonQuery, StoreError
from showcase.utils.dates import format_timestamp
from showcase.utils.error_logger import log_http_error

logger = get_logger(__name__)

# Equal timestamps fall back to _id, compared in the same direction
_BOUNDARY_FILTERS = {
    Comparison.OLDER: (
        "dateTime(publishedAt) < dateTime($boundaryPublishedAt)"
        " || (dateTime(publishedAt) == dateTime($boundaryPublishedAt) && _id < $boundaryId)"
    ),
    Comparison.NEWER: (
        "dateTime(publishedAt) > dateTime($boundaryPublishedAt)"
        " || (dateTime(publishedAt) == dateTime($boundaryPublishedAt) && _id > $boundaryId)"
    ),
}

_PROJECTION = "{_id, _type, title, publishedAt}"


class _RetryableStatus(Exception):
    """A 5xx response worth another attempt."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


def build_groq_query(query: LessonQuery) -> tuple[str, dict[str, Any]]:
    """Translate a `LessonQuery` into a GROQ string and its bound parameters."""
    params: dict[str, Any] = {"documentType": query.document_type, "limit": query.limit}
    # defined() guards against undefined ordering on missing timestamps
    conditions = ["_type == $documentType", "defined(publishedAt)"]

    if query.boundary is not None:
        conditions.append(f"({_BOUNDARY_FILTERS[query.boundary.comparison]})")
        params["boundaryId"] = query.boundary.id
        params["boundaryPublishedAt"] = format_timestamp(query.boundary.published_at)

    order = query.order.value
    groq = (
        f"*[{' && '.join(conditions)}]"
        f" | order(publishedAt {order}, _id {order})"
        f" [0...$limit] {_PROJECTION}"
    )
    return groq, params


class HostedContentStore:
    """
    Fetches lessons from the hosted content store.

    The store is the only place with retry logic: transport errors and 5xx
    responses are retried with exponential backoff, 4xx responses are not.
    """

    def __init__(
        self,
        project_id: str,
        dataset: str,
        api_version: str,
        *,
        use_cdn: bool = True,
        perspective: str | None = "published",
        token: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_wait_seconds: float = 0.5,
        client: httpx.Client | None = None,
    ):
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version
        self.use_cdn = use_cdn
        self.perspective = perspective
        self.max_retries = max(1, max_retries)
        self.retry_wait_seconds = retry_wait_seconds

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.Client(timeout=timeout, headers=headers)
        if client is not None:
            self._client.headers.update(headers)

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.Client | None = None):
        return cls(
            settings.content_project_id,
            settings.content_dataset,
            settings.content_api_version,
            use_cdn=settings.content_use_cdn,
            perspective=settings.content_perspective,
            token=settings.content_token,
            timeout=float(settings.http_timeout_seconds),
            max_retries=settings.http_max_retries,
            client=client,
        )

    @property
    def query_url(self) -> str:
        host = "apicdn.sanity.io" if self.use_cdn else "api.sanity.io"
        return f"https://{self.project_id}.{host}/v{self.api_version}/data/query/{self.dataset}"

    def close(self) -> None:
        self._client.close()

    def fetch(self, query: LessonQuery) -> list[Lesson]:
        groq, params = build_groq_query(query)
        payload = self.execute(groq, params)

        result = payload.get("result") if isinstance(payload, dict) else None
        if not isinstance(result, list):
            raise StoreError("Hosted store response has no result list")
        try:
            return [Lesson.model_validate(doc) for doc in result]
        except ValueError as e:
            raise StoreError(f"Hosted store returned an invalid lesson: {e}") from e

    def execute(self, groq: str, params: dict[str, Any]) -> dict[str, Any]:
        """Run a GROQ query with bound parameters and return the decoded body."""
        request_params = {"query": groq}
        for name, value in params.items():
            request_params[f"${name}"] = json.dumps(value)
        if self.perspective:
            request_params["perspective"] = self.perspective

        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=8),
            retry=retry_if_exception_type((httpx.TransportError, _RetryableStatus)),
            reraise=True,
        )

        try:
            for attempt in retrying:
                with attempt:
                    response = self._send(request_params, attempt.retry_state.attempt_number)
        except _RetryableStatus as e:
            log_http_error(
                "hosted_store",
                self.query_url,
                response=e.response,
                operation="fetch_lessons",
                context={"attempts": self.max_retries},
            )
            raise StoreError(
                f"Hosted store failed with HTTP {e.response.status_code} "
                f"after {self.max_retries} attempts"
            ) from e
        except httpx.TransportError as e:
            log_http_error(
                "hosted_store",
                self.query_url,
                error=e,
                operation="fetch_lessons",
                context={"attempts": self.max_retries},
            )
            raise StoreError(f"Hosted store unreachable: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            log_http_error("hosted_store", self.query_url, response=response, error=e)
            raise StoreError("Hosted store returned invalid JSON") from e

    def _send(self, request_params: dict[str, str], attempt_number: int) -> httpx.Response:
        logger.debug(
            "Querying hosted store (attempt %d)",
            attempt_number,
            extra={
                "component": "hosted_store",
                "operation": "fetch_lessons",
                "context_data": {"dataset": self.dataset, "attempt": attempt_number},
            },
        )
        response = self._client.get(self.query_url, params=request_params)

        if response.status_code >= 500:
            logger.warning(
                "Hosted store returned %d, will retry if attempts remain",
                response.status_code,
            )
            raise _RetryableStatus(response)
        if response.status_code >= 400:
            log_http_error(
                "hosted_store", self.query_url, response=response, operation="fetch_lessons"
            )
            raise StoreError(f"Hosted store rejected the query: HTTP {response.status_code}")
        return response
