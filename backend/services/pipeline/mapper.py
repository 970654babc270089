"""Mapper: turn a guard-approved raw path into a CareerPathResult.

Any stage that still breaks a hard invariant after normalization rejects the
whole candidate. Partial paths are never emitted.
"""

import logging
import re
from urllib.parse import urlparse

from pydantic import ValidationError

from models.requests import LegacyPathRequest
from models.responses import CareerPathResult, ValidatedStage
from models.schemas.policy import PipelinePolicy
from models.schemas.quality import QualityRejection, RejectionReason
from models.schemas.raw_output import RawCareerPath, RawCertification, RawSkill, RawStage
from services.normalizers import parse_salary, parse_years_experience
from services.pipeline.quality_guard import starts_with_action_verb
from services.similarity import title_similarity

logger = logging.getLogger(__name__)

TRUSTED_CERT_DOMAINS: frozenset[str] = frozenset({
    "coursera.org",
    "udemy.com",
    "linkedin.com",
    "aws.amazon.com",
    "microsoft.com",
    "google.com",
    "comptia.org",
    "pmi.org",
    "scrum.org",
    "cissp.org",
    "isaca.org",
    "cisco.com",
    "redhat.com",
    "oracle.com",
    "salesforce.com",
    "hubspot.com",
    "facebook.com",  # Meta certifications
    "cloudflare.com",
    "datacamp.com",
    "pluralsight.com",
    "edx.org",
    "kaggle.com",
    "github.com",
})

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    return _SLUG_RE.sub("-", value.lower()).strip("-")[:40]


def is_trusted_certification_url(url: str) -> bool:
    url = (url or "").strip()
    if not url or " " in url:
        return False
    if "://" not in url:
        url = f"https://{url}"
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False
    host = (parsed.hostname or "").lower()
    return any(host == domain or host.endswith("." + domain) for domain in TRUSTED_CERT_DOMAINS)


def filter_certifications(certs: list[str | RawCertification]) -> list[str]:
    """Keep certifications whose URL is on a trusted issuer domain.

    A bare string counts only if it is itself a trusted URL. Others are
    dropped silently.
    """
    kept: list[str] = []
    seen: set[str] = set()
    for cert in certs:
        if isinstance(cert, RawCertification):
            url, label = cert.url, cert.name.strip() or cert.url.strip()
        else:
            url, label = cert, cert.strip()
        if not is_trusted_certification_url(url):
            continue
        key = label.lower()
        if key and key not in seen:
            seen.add(key)
            kept.append(label)
    return kept


def normalize_keywords(keywords: list[str | RawSkill]) -> list[str]:
    """Flatten skill objects and deduplicate case-insensitively, keeping order."""
    result: list[str] = []
    seen: set[str] = set()
    for kw in keywords:
        text = kw.name if isinstance(kw, RawSkill) else kw
        text = " ".join(text.split())
        if text and text.lower() not in seen:
            seen.add(text.lower())
            result.append(text)
    return result


def _clip(text: str, limit: int) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    cut = text[:limit].rsplit(" ", 1)[0]
    return cut or text[:limit]


def map_stage(
    stage: RawStage, index: int, policy: PipelinePolicy
) -> ValidatedStage | QualityRejection:
    title = " ".join(stage.title.split())
    if not title:
        return QualityRejection(
            reason=RejectionReason.INVALID_STAGE,
            detail=f"Stage {index + 1} has an empty title",
            stage_index=index,
        )
    if starts_with_action_verb(title):
        return QualityRejection(
            reason=RejectionReason.ACTION_VERB_TITLE,
            detail=f"Stage {index + 1} title {title!r} reads as a task, not a role",
            stage_index=index,
        )

    try:
        return ValidatedStage(
            title=title,
            description=_clip(stage.description, policy.max_description_length),
            years=parse_years_experience(stage.years_experience),
            salary=parse_salary(stage.salary),
            keywords=normalize_keywords(stage.keywords),
            certifications=filter_certifications(stage.certifications),
        )
    except ValidationError as e:
        return QualityRejection(
            reason=RejectionReason.INVALID_STAGE,
            detail=f"Stage {index + 1} failed validation: {e.error_count()} errors",
            stage_index=index,
        )


def _assemble_career_path(
    stages: list[RawStage],
    target_role: str,
    policy: PipelinePolicy,
    *,
    path_id: str,
    name: str,
) -> CareerPathResult | QualityRejection:
    """Map stages and enforce the invariants every CareerPathResult holds."""
    if len(stages) < policy.min_stages:
        return QualityRejection(
            reason=RejectionReason.INSUFFICIENT_STAGES,
            detail=f"Only {len(stages)} stages provided, need at least {policy.min_stages}",
        )

    nodes: list[ValidatedStage] = []
    for index, stage in enumerate(stages):
        mapped = map_stage(stage, index, policy)
        if isinstance(mapped, QualityRejection):
            logger.info("Mapper rejected stage %d: %s", index + 1, mapped.detail)
            return mapped
        nodes.append(mapped)

    final_title = nodes[-1].title
    score = title_similarity(final_title, target_role)
    if score < policy.title_similarity_threshold:
        return QualityRejection(
            reason=RejectionReason.FINAL_TITLE_MISMATCH,
            detail=f"Final role {final_title!r} does not match target {target_role!r} ({score:.2f})",
            stage_index=len(nodes) - 1,
        )

    return CareerPathResult(id=path_id, name=name, target_role=target_role, nodes=nodes)


def map_career_path(
    raw: RawCareerPath,
    target_role: str,
    policy: PipelinePolicy | None = None,
    path_id: str | None = None,
) -> CareerPathResult | QualityRejection:
    """Map a raw path to a CareerPathResult, or return why it was refused."""
    return _assemble_career_path(
        raw.stages,
        target_role,
        policy or PipelinePolicy(),
        path_id=path_id or (str(raw.id) if raw.id is not None else f"{slugify(target_role)}-path"),
        name=(raw.name or "").strip() or f"{target_role} Path",
    )


def has_guidance_markers(legacy: LegacyPathRequest) -> bool:
    """Profile-guidance tasks were once stored as path nodes.

    They are recognizable by a "Profile update" salary or a duration in
    minutes where years of experience belong.
    """
    return any(
        node.salaryRange.strip().lower() == "profile update"
        or "minute" in node.yearsExperience.lower()
        for node in legacy.nodes
    )


def migrate_legacy_path(
    legacy: LegacyPathRequest, policy: PipelinePolicy | None = None
) -> CareerPathResult | QualityRejection:
    """Convert a stored untagged path into a tagged CareerPathResult.

    The result passes the same stage-count and final-title checks as a
    freshly generated path.
    """
    if has_guidance_markers(legacy):
        return QualityRejection(
            reason=RejectionReason.LEGACY_GUIDANCE_MARKERS,
            detail="Legacy path contains profile guidance markers",
        )

    stages = [
        RawStage(
            title=node.title,
            description=node.description,
            level=node.level,
            years_experience=node.yearsExperience or None,
            salary=node.salaryRange or None,
            keywords=[
                RawSkill(name=str(skill["name"]), level=str(skill.get("level") or ""))
                for skill in node.skills
                if isinstance(skill, dict) and skill.get("name")
            ],
        )
        for node in legacy.nodes
    ]
    return _assemble_career_path(
        stages,
        legacy.target_role or legacy.name,
        policy or PipelinePolicy(),
        path_id=legacy.id,
        name=legacy.name,
    )
