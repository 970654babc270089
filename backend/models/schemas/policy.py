"""Tunable thresholds for the career path pipeline, held in one place."""

from pydantic import BaseModel, ConfigDict, Field


class PipelinePolicy(BaseModel):
    """Every policy value the pipeline consults.

    Values are empirically tuned against generation telemetry; treat them as
    data. Build from environment settings with ``from_settings``.
    """
    model_config = ConfigDict(frozen=True)

    # Orchestrator
    max_attempts: int = Field(3, ge=1, le=10)

    # Quality guard
    min_stages: int = Field(4, ge=1)
    min_description_length: int = Field(10, ge=0)
    min_unique_titles: int = Field(3, ge=1)
    min_unique_feeders: int = Field(2, ge=0)
    max_modifier_variants: int = Field(2, ge=1)
    keyword_reduction_factor: float = Field(0.7, gt=0.0, le=1.0)
    title_similarity_threshold: float = Field(0.6, ge=0.0, le=1.0)
    require_stage_levels: bool = True
    allowed_stage_levels: frozenset[str] = frozenset({"entry", "mid", "senior", "lead", "executive"})
    require_stage_skills: bool = True
    allowed_skill_levels: frozenset[str] = frozenset({"basic", "intermediate", "advanced"})

    # Structural limits
    max_completion_chars: int = Field(20000, ge=1)
    max_description_length: int = Field(500, ge=1)

    # Fallback builder
    min_guidance_tasks: int = Field(3, ge=1)
    max_guidance_tasks: int = Field(5, ge=2)

    @classmethod
    def from_settings(cls, settings) -> "PipelinePolicy":
        return cls(
            max_attempts=settings.max_generation_attempts,
            min_stages=settings.min_stages,
            min_description_length=settings.min_description_length,
            keyword_reduction_factor=settings.keyword_reduction_factor,
            title_similarity_threshold=settings.title_similarity_threshold,
        )
