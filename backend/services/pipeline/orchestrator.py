"""Pipeline orchestrator: bounded attempts, then profile guidance.

Flow per attempt:
    REQUESTING            backend.complete(prompt)          -> raw text
    VALIDATING_STRUCTURE  parse_model_output(text)          -> RawCareerPath
    CHECKING_QUALITY      evaluate_quality(raw, ...)        -> QualityReport
    MAPPING               map_career_path(raw, ...)         -> CareerPathResult
      └─ ACCEPTED (terminal)

Any failure -> REJECTED: telemetry first, then retry while attempts remain.
Budget exhausted -> BUILDING_FALLBACK -> FALLBACK_ACCEPTED (terminal).

Only caller input errors escape; everything else ends in a tagged result.
"""

import logging
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any

from models.requests import CareerPathRequest, ProfileSignals
from models.responses import CareerPathResult, PathGenerationResult
from models.schemas.policy import PipelinePolicy
from models.schemas.quality import QualityRejection, RejectionReason
from services.career_domains import select_domain
from services.exceptions import CompletionError, CompletionTimeout, MalformedOutputError
from services.gemini_client import CompletionBackend
from services.pipeline.fallback_builder import build_profile_guidance
from services.pipeline.mapper import map_career_path, slugify
from services.pipeline.quality_guard import evaluate_quality
from services.pipeline.structural_validator import parse_model_output, validate_request
from services.pipeline.telemetry import TelemetryRecorder
from services.prompt_builder import build_career_path_prompt

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    REQUESTING = "requesting"
    VALIDATING_STRUCTURE = "validating_structure"
    CHECKING_QUALITY = "checking_quality"
    MAPPING = "mapping"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    BUILDING_FALLBACK = "building_fallback"
    FALLBACK_ACCEPTED = "fallback_accepted"


def _prompt_variant(attempt: int) -> str:
    return "base" if attempt == 1 else "refine"


async def _request_completion(backend: CompletionBackend, prompt: str) -> str | QualityRejection:
    try:
        text = await backend.complete(prompt)
    except CompletionTimeout as e:
        return QualityRejection(reason=RejectionReason.BACKEND_TIMEOUT, detail=str(e))
    except CompletionError as e:
        return QualityRejection(reason=RejectionReason.BACKEND_ERROR, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected completion backend failure")
        return QualityRejection(
            reason=RejectionReason.BACKEND_ERROR, detail=f"{type(e).__name__}: {e}"
        )

    if not isinstance(text, str) or not text.strip():
        return QualityRejection(reason=RejectionReason.EMPTY_COMPLETION, detail="Backend returned no text")
    return text


async def generate_career_path(
    request: CareerPathRequest | Mapping[str, Any],
    backend: CompletionBackend | None,
    *,
    profile: ProfileSignals | None = None,
    policy: PipelinePolicy | None = None,
    recorder: TelemetryRecorder | None = None,
    user_id: str | None = None,
) -> PathGenerationResult:
    """Run the attempt loop and return a tagged result.

    Raises InvalidRequestError for a bad request, before any attempt.
    A missing backend goes straight to guidance.
    """
    request = validate_request(request)
    policy = policy or PipelinePolicy()
    target_role = request.target_role
    profile = profile or request.profile
    recorder = recorder or TelemetryRecorder(target_role, user_id=user_id)
    domain = select_domain(target_role)
    path_id = f"{slugify(target_role) or 'path'}-{uuid.uuid4().hex[:8]}"

    last_rejection: QualityRejection | None = None
    attempts_made = 0

    if backend is None:
        last_rejection = QualityRejection(
            reason=RejectionReason.BACKEND_UNAVAILABLE,
            detail="No generative backend configured",
        )
        logger.warning("No completion backend; returning profile guidance for %r", target_role)
    else:
        for attempt in range(1, policy.max_attempts + 1):
            attempts_made = attempt
            variant = _prompt_variant(attempt)
            state = PipelineState.REQUESTING
            recorder.attempt_started(attempt, variant)

            prompt = build_career_path_prompt(
                target_role,
                domain=domain,
                variant=variant,
                region=request.region,
                min_stages=policy.min_stages,
                previous_rejection=last_rejection,
            )
            outcome = await _request_completion(backend, prompt)

            if isinstance(outcome, str):
                state = PipelineState.VALIDATING_STRUCTURE
                try:
                    raw = parse_model_output(outcome, policy)
                except MalformedOutputError as e:
                    outcome = QualityRejection(reason=RejectionReason.MALFORMED_OUTPUT, detail=str(e))
                else:
                    state = PipelineState.CHECKING_QUALITY
                    report = evaluate_quality(raw, target_role, domain, policy)
                    if not report.passed:
                        outcome = report.primary
                        if len(report.rejections) > 1:
                            logger.info(
                                "Attempt %d also failed: %s",
                                attempt, ", ".join(r.value for r in report.reasons[1:]),
                            )
                    else:
                        state = PipelineState.MAPPING
                        outcome = map_career_path(raw, target_role, policy, path_id=path_id)

            if isinstance(outcome, CareerPathResult):
                recorder.attempt_succeeded(attempt, variant)
                logger.info(
                    "Career path accepted for %r on attempt %d (%s)",
                    target_role, attempt, PipelineState.ACCEPTED.value,
                )
                return outcome

            last_rejection = outcome
            recorder.attempt_rejected(attempt, variant, outcome)
            logger.info(
                "Attempt %d/%d for %r %s in %s: %s",
                attempt, policy.max_attempts, target_role,
                PipelineState.REJECTED.value, state.value, outcome.reason.value,
            )

    logger.info(
        "Falling back to profile guidance for %r after %d attempts (%s)",
        target_role, attempts_made, PipelineState.BUILDING_FALLBACK.value,
    )
    recorder.fallback_used(attempts_made, last_rejection)
    guidance = build_profile_guidance(
        target_role,
        signals=profile,
        domain=domain,
        policy=policy,
        guidance_id=f"{path_id}-guidance",
    )
    logger.debug("Guidance %s for %r (%s)", guidance.id, target_role, PipelineState.FALLBACK_ACCEPTED.value)
    return guidance
