"""Inter-stage Pydantic contracts for the career path pipeline."""

from models.schemas.policy import PipelinePolicy
from models.schemas.quality import QualityRejection, QualityReport, RejectionReason
from models.schemas.raw_output import RawCareerPath, RawCertification, RawSkill, RawStage
from models.schemas.telemetry_event import TelemetryEvent, TelemetryEventType

__all__ = [
    "PipelinePolicy",
    "QualityRejection",
    "QualityReport",
    "RejectionReason",
    "RawCareerPath",
    "RawCertification",
    "RawSkill",
    "RawStage",
    "TelemetryEvent",
    "TelemetryEventType",
]
