from pydantic import BaseModel, Field, field_validator


class ProfileSignals(BaseModel):
    """Profile-completeness signals supplied by the caller's profile store."""
    has_work_history: bool = False
    has_domain_experience: bool = False
    skills_count: int = Field(0, ge=0)
    has_domain_skills: bool = False
    has_education: bool = False
    has_career_goal: bool = False
    has_summary: bool = False
    has_industry: bool = False
    has_resume: bool = False


class CareerPathRequest(BaseModel):
    target_role: str = Field(..., min_length=1, max_length=200, description="Role the user wants to reach")
    region: str | None = Field(None, max_length=100, description="Optional market/region context")
    profile: ProfileSignals | None = None

    @field_validator("target_role")
    @classmethod
    def _strip_target_role(cls, value: str) -> str:
        stripped = " ".join(value.split())
        if not stripped:
            raise ValueError("target_role must not be blank")
        return stripped

    @field_validator("region")
    @classmethod
    def _strip_region(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class LegacyNode(BaseModel):
    """A node from a path stored before results were tagged."""
    id: str = ""
    title: str
    level: str = ""
    salaryRange: str = ""
    yearsExperience: str = ""
    skills: list[dict] = []
    description: str = ""


class LegacyPathRequest(BaseModel):
    id: str
    name: str
    target_role: str | None = None
    nodes: list[LegacyNode] = Field(..., min_length=1)
