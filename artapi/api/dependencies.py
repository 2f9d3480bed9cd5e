"""FastAPI dependencies resolving the components stored on app.state by create_app()."""

from fastapi import Request

from artapi.config.settings import Settings
from artapi.ratelimit.base import BaseRateLimiter
from artapi.submission.pipeline import SubmissionPipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_pipeline(request: Request) -> SubmissionPipeline:
    return request.app.state.pipeline


def get_rate_limiter(request: Request) -> BaseRateLimiter:
    return request.app.state.rate_limiter


def client_identity(request: Request) -> str:
    """Rate-limit key: first X-Forwarded-For entry, else the peer host."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded.strip():
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
