"""Attempt-scoped telemetry record emitted by the orchestrator."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from models.schemas.quality import RejectionReason


class TelemetryEventType(str, Enum):
    ATTEMPT_STARTED = "attempt_started"
    ATTEMPT_SUCCEEDED = "attempt_succeeded"
    ATTEMPT_REJECTED = "attempt_rejected"
    FALLBACK_USED = "fallback_used"


class TelemetryEvent(BaseModel):
    event: TelemetryEventType
    user_id: str | None = None
    target_role: str
    attempt: int = 0  # 0 when no generation attempt was involved
    outcome: str = "pending"  # pending | success | failure
    reason: RejectionReason | None = None
    detail: str = ""
    prompt_variant: str | None = None
    duration_ms: float | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
