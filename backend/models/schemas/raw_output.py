"""Untrusted shape of a generative career path completion.

Only structure is enforced here: required keys present and each of the right
primitive kind. Semantic checks live in the quality guard.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RawSkill(BaseModel):
    """A skill object as the model emits it ({name, level})."""
    name: str
    level: str = ""


class RawCertification(BaseModel):
    """A certification object as the model emits it."""
    name: str = ""
    issuer: str = ""
    url: str = ""


class RawStage(BaseModel):
    """A single career stage before normalization."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    level: str = ""
    years_experience: str | float | list[float] | None = Field(
        None, validation_alias=AliasChoices("years_experience", "yearsExperience", "years")
    )
    salary: str | float | list[float] | None = Field(
        None, validation_alias=AliasChoices("salary", "salaryRange", "salary_range")
    )
    keywords: list[str | RawSkill] = Field(
        default_factory=list, validation_alias=AliasChoices("keywords", "skills")
    )
    certifications: list[str | RawCertification] = []


class RawCareerPath(BaseModel):
    """The whole completion: one ordered path toward a target role."""
    model_config = ConfigDict(populate_by_name=True)

    id: str | int | None = None
    name: str | None = None
    target_role: str | None = Field(
        None, validation_alias=AliasChoices("target_role", "targetRole")
    )
    stages: list[RawStage] = Field(
        ..., min_length=1, validation_alias=AliasChoices("stages", "nodes")
    )
