"""JSON API routers."""

from fastapi import APIRouter

from showcase.routers.api import lessons

router = APIRouter(
    tags=["lessons"],
    responses={400: {"description": "Invalid pagination parameters"}},
)

router.include_router(lessons.router)
