from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_completion_backend, get_pipeline_policy, get_user_id
from config import settings
from models.requests import CareerPathRequest, LegacyPathRequest
from models.responses import CareerPathResult, PathGenerationResult
from models.schemas.policy import PipelinePolicy
from models.schemas.quality import QualityRejection
from services.gemini_client import CompletionBackend
from services.pipeline.mapper import migrate_legacy_path
from services.pipeline.orchestrator import generate_career_path

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


@router.post("/career-path/generate", response_model=PathGenerationResult)
@limiter.limit("10/minute")
async def generate(
    request: Request,
    body: CareerPathRequest,
    backend: CompletionBackend | None = Depends(get_completion_backend),
    policy: PipelinePolicy = Depends(get_pipeline_policy),
    user_id: str | None = Depends(get_user_id),
):
    return await generate_career_path(body, backend, policy=policy, user_id=user_id)


@router.post("/career-path/migrate", response_model=CareerPathResult)
async def migrate(body: LegacyPathRequest, policy: PipelinePolicy = Depends(get_pipeline_policy)):
    result = migrate_legacy_path(body, policy)
    if isinstance(result, QualityRejection):
        raise HTTPException(status_code=400, detail=result.model_dump(mode="json"))
    return result
