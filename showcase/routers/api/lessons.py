"""Lesson listing endpoint with bidirectional cursor pagination."""

from collections.abc import Mapping
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from showcase.core.deps import get_paginator
from showcase.core.logging import get_logger
from showcase.core.settings import Settings, get_settings
from showcase.models.pagination import PaginationResult
from showcase.repositories.base import StoreError
from showcase.routers.api.models import LessonPageResponse
from showcase.services.paginator import CursorPaginator
from showcase.utils.error_logger import log_error
from showcase.utils.pagination import page_request_from_params

logger = get_logger(__name__)

router = APIRouter()


def paginate_request(
    paginator: CursorPaginator, params: Mapping[str, str], settings: Settings
) -> PaginationResult:
    """Decode query parameters, run the paginator and map failures to HTTP errors."""
    try:
        page_request = page_request_from_params(params, settings.default_per_page)
        if page_request.per_page > settings.max_per_page:
            raise ValueError(f"perPage must be at most {settings.max_per_page}")
        return paginator.paginate(page_request.cursor, page_request.per_page)
    except StoreError as e:
        log_error(
            "lessons",
            e,
            operation="paginate_request",
            context={"params": dict(params)},
        )
        raise HTTPException(status_code=502, detail="Lesson store unavailable") from e
    except ValueError as e:
        logger.info(
            "Rejected pagination parameters: %s",
            e,
            extra={
                "component": "lessons",
                "operation": "paginate_request",
                "context_data": {"params": dict(params)},
            },
        )
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get(
    "/lessons",
    response_model=LessonPageResponse,
    summary="List lessons",
    description=(
        "Retrieve lessons newest first, paginated by publishedAt with _id as tie-breaker. "
        "Pass lastId/lastPublishedAt for the next (older) page or "
        "firstId/firstPublishedAt for the previous (newer) page."
    ),
)
def list_lessons(
    paginator: Annotated[CursorPaginator, Depends(get_paginator)],
    settings: Annotated[Settings, Depends(get_settings)],
    first_id: str | None = Query(None, alias="firstId", description="Previous-page boundary id"),
    first_published_at: str | None = Query(
        None, alias="firstPublishedAt", description="Previous-page boundary timestamp"
    ),
    last_id: str | None = Query(None, alias="lastId", description="Next-page boundary id"),
    last_published_at: str | None = Query(
        None, alias="lastPublishedAt", description="Next-page boundary timestamp"
    ),
    per_page: int | None = Query(None, alias="perPage", description="Lessons per page"),
) -> LessonPageResponse:
    """List lessons for one cursor position."""
    params = {
        "firstId": first_id,
        "firstPublishedAt": first_published_at,
        "lastId": last_id,
        "lastPublishedAt": last_published_at,
        "perPage": str(per_page) if per_page is not None else None,
    }
    params = {k: v for k, v in params.items() if v is not None}

    result = paginate_request(paginator, params, settings)
    return LessonPageResponse.from_result(result)
