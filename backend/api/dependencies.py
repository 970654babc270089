"""Shared dependencies for API routes."""

from fastapi import Header

from config import settings
from models.schemas.policy import PipelinePolicy
from services.gemini_client import GeminiBackend, get_backend


def get_completion_backend() -> GeminiBackend | None:
    return get_backend()


def get_pipeline_policy() -> PipelinePolicy:
    return PipelinePolicy.from_settings(settings)


def get_user_id(x_user_id: str | None = Header(None, max_length=128)) -> str | None:
    """Caller identity for telemetry; authentication happens upstream."""
    return x_user_id or None
