"""FastAPI application for artwork submissions and the favorites listing."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from artapi.api.exceptions import ImageValidationError, RateLimitExceededError
from artapi.api.routes import router
from artapi.config.settings import Settings
from artapi.logging.logger import Log
from artapi.ratelimit.base import BaseRateLimiter
from artapi.ratelimit.rate_limiter import RateLimiter
from artapi.storage.exceptions import StorageError
from artapi.submission.exceptions import SubmissionError
from artapi.submission.pipeline import SubmissionPipeline, build_pipeline

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Log.info("API starting")
    try:
        yield
    finally:
        Log.info("API shutting down")
        app.state.rate_limiter.stop()
        app.state.pipeline.close()
        Log.info("Shutdown complete")


async def cors_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Allow any origin; answer every OPTIONS request directly with an empty 200."""
    if request.method == "OPTIONS":
        response = Response(status_code=status.HTTP_200_OK)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def _image_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.warning(f"Rejected submission: {exc}", path=request.url.path)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def _rate_limit_handler(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    Log.warning("Rate limit exceeded", identity=exc.identity)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": "Rate limit exceeded. Please wait 1 minute."},
        headers={"Retry-After": str(exc.retry_after_seconds)},
    )


async def _submission_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"Failed to submit art: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Failed to process artwork"},
    )


async def _storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"Storage failure: {type(exc).__name__}: {exc}", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Failed to retrieve favorites"},
    )


def create_app(
    settings: Settings | None = None,
    *,
    pipeline: SubmissionPipeline | None = None,
    rate_limiter: BaseRateLimiter | None = None,
) -> FastAPI:
    """Build the application. Components not passed in are built from settings."""
    settings = settings or Settings()
    if pipeline is None:
        pipeline = build_pipeline(settings)
    if rate_limiter is None:
        rate_limiter = RateLimiter(
            settings.rate_limit_window_seconds,
            retention_seconds=settings.rate_limit_retention_seconds,
        )

    app = FastAPI(title="Art Submission API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.pipeline = pipeline
    app.state.rate_limiter = rate_limiter

    app.middleware("http")(cors_middleware)
    app.add_exception_handler(ImageValidationError, _image_validation_handler)
    app.add_exception_handler(RateLimitExceededError, _rate_limit_handler)
    app.add_exception_handler(SubmissionError, _submission_error_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    app.include_router(router)
    return app
