"""The pagination showcase page."""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from showcase.constants import PAGE_TITLE, PER_PAGE_CHOICES
from showcase.core.deps import get_paginator
from showcase.core.settings import Settings, get_settings
from showcase.routers.api.lessons import paginate_request
from showcase.services.paginator import CursorPaginator
from showcase.templates import templates
from showcase.utils.pagination import (
    next_page_query,
    per_page_query,
    prev_page_query,
    reset_query,
)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def lessons_page(
    request: Request,
    paginator: Annotated[CursorPaginator, Depends(get_paginator)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Render one page of lessons with Prev / Reset / Next and per-page controls."""
    current = dict(request.query_params)
    result = paginate_request(paginator, current, settings)

    per_page_options = [
        {
            "value": value,
            "href": per_page_query(current, value),
            "selected": value == result.per_page,
        }
        for value in PER_PAGE_CHOICES
    ]

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": PAGE_TITLE,
            "lessons": result.page,
            "per_page": result.per_page,
            "has_prev": result.has_prev,
            "has_next": result.has_next,
            "prev_href": prev_page_query(current, result.prev_cursor)
            if result.prev_cursor
            else None,
            "next_href": next_page_query(current, result.next_cursor)
            if result.next_cursor
            else None,
            "reset_href": reset_query(current),
            "per_page_options": per_page_options,
            "debug_params": json.dumps(current, indent=2),
        },
    )
