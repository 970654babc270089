"""Caller-facing result types.

The two pipeline outcomes are distinct models joined by a ``type`` tag so a
guidance result can never be read as a career path, or vice versa.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ValidatedStage(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    years: tuple[int, int] | None = None  # [min, max], each 0-50
    salary: tuple[int, int] | None = None  # [min, max] in whole currency units
    keywords: list[str] = []
    certifications: list[str] = []  # names with a trusted issuer domain


class CareerPathResult(BaseModel):
    type: Literal["career_path"] = "career_path"
    id: str
    name: str
    target_role: str
    nodes: list[ValidatedStage] = Field(..., min_length=1)


class TaskCategory(str, Enum):
    WORK_HISTORY = "work_history"
    SKILLS = "skills"
    EDUCATION = "education"
    CAREER_GOALS = "career_goals"
    PROFILE_SUMMARY = "profile_summary"
    PROFILE_BASICS = "profile_basics"
    DOCUMENTS = "documents"
    PROFILE_ENHANCEMENT = "profile_enhancement"
    NEXT_STEPS = "next_steps"


class TaskPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProfileTask(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    title: str
    description: str
    category: TaskCategory
    priority: TaskPriority
    estimated_duration_minutes: int = Field(..., ge=1, le=240)
    action_url: str = Field(..., min_length=1)


class ProfileGuidanceResult(BaseModel):
    type: Literal["profile_guidance"] = "profile_guidance"
    id: str
    target_role: str
    message: str = Field(..., min_length=1)
    tasks: list[ProfileTask] = Field(..., min_length=1)


PathGenerationResult = Annotated[
    Union[CareerPathResult, ProfileGuidanceResult],
    Field(discriminator="type"),
]
