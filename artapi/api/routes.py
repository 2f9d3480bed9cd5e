import asyncio
import math

from fastapi import APIRouter, Depends, Request, status
from starlette.concurrency import run_in_threadpool

from artapi.api.dependencies import client_identity, get_pipeline, get_rate_limiter, get_settings
from artapi.api.exceptions import RateLimitExceededError
from artapi.api.schemas import ArtPieceResponse, FavoritesResponse, SubmissionResponse
from artapi.api.uploads import read_image_upload
from artapi.concurrency.cancel_scope import CancelScope
from artapi.config.settings import Settings
from artapi.logging.logger import Log
from artapi.ratelimit.base import BaseRateLimiter
from artapi.submission.pipeline import SubmissionPipeline

DISCONNECT_POLL_SECONDS = 0.5

router = APIRouter(prefix="/api/v1/art", tags=["art"])


async def _cancel_on_disconnect(request: Request, scope: CancelScope) -> None:
    while not scope.cancelled:
        if await request.is_disconnected():
            Log.warning("Client disconnected, cancelling submission")
            scope.cancel()
            return
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
async def submit_art(
    request: Request,
    pipeline: SubmissionPipeline = Depends(get_pipeline),
    rate_limiter: BaseRateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> SubmissionResponse:
    """Store an artwork image and return its AI-generated title and tags."""
    identity = client_identity(request)
    if not rate_limiter.allow(identity):
        raise RateLimitExceededError(
            identity, retry_after_seconds=math.ceil(settings.rate_limit_window_seconds)
        )

    image_bytes = await read_image_upload(
        request,
        max_image_bytes=settings.max_image_bytes,
        max_form_bytes=settings.max_form_bytes,
    )

    scope = CancelScope()
    watcher = asyncio.create_task(_cancel_on_disconnect(request, scope))
    try:
        result = await run_in_threadpool(pipeline.submit, image_bytes, scope)
    finally:
        watcher.cancel()

    return SubmissionResponse.from_result(result)


@router.get("/favorites", response_model=FavoritesResponse)
async def list_favorites(
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> FavoritesResponse:
    """List favorited artworks with time-limited image URLs."""
    pieces = await run_in_threadpool(pipeline.list_favorites)
    return FavoritesResponse(pieces=[ArtPieceResponse.from_piece(p) for p in pieces])
