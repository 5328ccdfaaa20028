import json
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from showcase.constants import PAGE_TITLE
from showcase.core.deps import close_lesson_store
from showcase.core.logging import setup_logging
from showcase.core.settings import get_settings
from showcase.routers import api, lessons

# Initialize
settings = get_settings()
logger = setup_logging()

# Create app
app = FastAPI(
    title=settings.app_name,
    version="2.0.0",
    description=f"{PAGE_TITLE}: cursor-based pagination over a content store",
)


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {
            "loc": error.get("loc"),
            "msg": str(error.get("msg", "")),
            "type": error.get("type"),
        }
        # Only include input if it's JSON-serializable
        if "input" in error:
            try:
                json.dumps(error["input"])
                serialized_error["input"] = error["input"]
            except (TypeError, ValueError):
                serialized_error["input"] = str(error["input"])
        serialized.append(serialized_error)
    return serialized


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log rejected query parameters before returning the standard 422 body."""
    errors = _serialize_validation_errors(exc.errors())
    logger.warning(
        "Request validation failed: %s %s",
        request.method,
        request.url.path,
        extra={
            "component": "http",
            "operation": "validate_request",
            "context_data": {
                "query": dict(request.query_params),
                "errors": errors,
            },
        },
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


# Request logging middleware with timing
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming HTTP requests with timing information."""
    start_time = time.perf_counter()

    logger.info(f">>> {request.method} {request.url.path}")

    response = await call_next(request)

    duration_ms = (time.perf_counter() - start_time) * 1000
    response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

    method = request.method
    path = request.url.path
    status_code = response.status_code
    time_str = f"{duration_ms:.2f}ms"

    if duration_ms < 100:
        logger.info(f"<<< {method} {path} - {status_code} [{time_str}]")
    elif duration_ms < 500:
        logger.info(f"<<< {method} {path} - {status_code} [{time_str}] (slow)")
    else:
        logger.warning(f"<<< {method} {path} - {status_code} [{time_str}] (very slow)")

    return response


# Include routers
app.include_router(lessons.router)
app.include_router(api.router, prefix="/api")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Close the shared lesson store (the hosted store owns an HTTP client)."""
    close_lesson_store()


# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name, "store": settings.store_backend}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
