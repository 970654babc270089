"""Typed rejection reasons shared by the structural validator, guard and mapper."""

from enum import Enum

from pydantic import BaseModel


class RejectionReason(str, Enum):
    """Closed set of reasons an attempt can fail.

    Quality reasons come from the guard and mapper; the remaining ones
    describe structural or backend failures of a generation attempt.
    """
    # Quality guard
    INSUFFICIENT_STAGES = "insufficient_stages"
    DESCRIPTION_TOO_SHORT = "description_too_short"
    INVALID_LEVEL_VALUES = "invalid_level_values"
    SKILLS_MISSING_OR_MALFORMED = "skills_missing_or_malformed"
    INSUFFICIENT_DOMAIN_SPECIFICITY = "insufficient_domain_specificity"
    TITLES_NOT_DISTINCT = "titles_not_distinct"
    INSUFFICIENT_FEEDER_ROLES = "insufficient_feeder_roles"
    TOO_MANY_MODIFIER_TITLES = "too_many_modifier_titles"
    ACTION_VERB_TITLE = "action_verb_title"
    FINAL_TITLE_MISMATCH = "final_title_mismatch"

    # Mapper
    INVALID_STAGE = "invalid_stage"
    LEGACY_GUIDANCE_MARKERS = "legacy_guidance_markers"

    # Structural / backend
    MALFORMED_OUTPUT = "malformed_output"
    EMPTY_COMPLETION = "empty_completion"
    BACKEND_TIMEOUT = "backend_timeout"
    BACKEND_ERROR = "backend_error"
    BACKEND_UNAVAILABLE = "backend_unavailable"


class QualityRejection(BaseModel):
    """Why a candidate path was refused, with diagnostic detail."""
    reason: RejectionReason
    detail: str = ""
    stage_index: int | None = None  # 0-based, when a single stage is at fault


class QualityReport(BaseModel):
    """All failing checks for one candidate, in evaluation order."""
    rejections: list[QualityRejection] = []

    @property
    def passed(self) -> bool:
        return not self.rejections

    @property
    def primary(self) -> QualityRejection | None:
        return self.rejections[0] if self.rejections else None

    @property
    def reasons(self) -> list[RejectionReason]:
        return [r.reason for r in self.rejections]
