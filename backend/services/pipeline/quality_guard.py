"""Quality guard: independent semantic checks on a structurally valid path.

Each check returns None on pass or a QualityRejection with its own reason, so
thresholds can be tuned per rule from telemetry. ``evaluate_quality`` runs
every check in a fixed order and reports all failures; the first one is the
primary reason.
"""

import logging
import math
import re
from collections.abc import Callable

from models.schemas.policy import PipelinePolicy
from models.schemas.quality import QualityRejection, QualityReport, RejectionReason
from models.schemas.raw_output import RawCareerPath, RawSkill
from services.career_domains import (
    GENERAL_DOMAIN,
    DomainProfile,
    has_domain_keyword,
    strip_level_qualifiers,
)
from services.similarity import title_similarity

logger = logging.getLogger(__name__)

# Imperative verbs that mark a profile-prep task rather than a job role.
# Words that also open real titles ("Build", "Research", "Network", "Lead") are excluded.
ACTION_VERBS: frozenset[str] = frozenset({
    "add", "apply", "attend", "complete", "connect", "create", "draft", "earn",
    "enroll", "expand", "finish", "gather", "highlight", "identify", "improve",
    "join", "link", "obtain", "polish", "prepare", "refresh", "regenerate",
    "review", "schedule", "set", "showcase", "specify", "start", "tailor",
    "take", "update", "upload", "write",
})

_FIRST_WORD_RE = re.compile(r"[a-z]+")
_GENERIC_PREFIX_RE = re.compile(r"^(junior|jr\.?|mid|mid-level|senior|sr\.?|lead|ii|iii|iv)\b", re.IGNORECASE)

Check = Callable[[RawCareerPath, str, DomainProfile, PipelinePolicy], QualityRejection | None]


def starts_with_action_verb(title: str) -> bool:
    match = _FIRST_WORD_RE.match((title or "").strip().lower())
    return bool(match) and match.group(0) in ACTION_VERBS


def check_action_verb_titles(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    for index, stage in enumerate(path.stages):
        if starts_with_action_verb(stage.title):
            return QualityRejection(
                reason=RejectionReason.ACTION_VERB_TITLE,
                detail=f"Stage {index + 1} title {stage.title!r} reads as a task, not a role",
                stage_index=index,
            )
    return None


def check_stage_count(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    if len(path.stages) < policy.min_stages:
        return QualityRejection(
            reason=RejectionReason.INSUFFICIENT_STAGES,
            detail=f"Only {len(path.stages)} stages provided, need at least {policy.min_stages}",
        )
    return None


def check_description_length(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    for index, stage in enumerate(path.stages):
        if len(stage.description.strip()) < policy.min_description_length:
            return QualityRejection(
                reason=RejectionReason.DESCRIPTION_TOO_SHORT,
                detail=(
                    f"Stage {index + 1} description is shorter than "
                    f"{policy.min_description_length} characters"
                ),
                stage_index=index,
            )
    return None


def check_stage_levels(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    if not policy.require_stage_levels:
        return None
    for index, stage in enumerate(path.stages):
        if stage.level.strip().lower() not in policy.allowed_stage_levels:
            return QualityRejection(
                reason=RejectionReason.INVALID_LEVEL_VALUES,
                detail=f"Stage {index + 1} has level {stage.level!r}",
                stage_index=index,
            )
    return None


def _is_well_formed_skill(skill: str | RawSkill, allowed_levels: frozenset[str]) -> bool:
    # Bare strings carry no level
    return (
        isinstance(skill, RawSkill)
        and bool(skill.name.strip())
        and skill.level.strip().lower() in allowed_levels
    )


def check_stage_skills(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    """Every stage lists at least one skill, each with a name and a known level."""
    if not policy.require_stage_skills:
        return None
    for index, stage in enumerate(path.stages):
        if not stage.keywords or not all(
            _is_well_formed_skill(skill, policy.allowed_skill_levels) for skill in stage.keywords
        ):
            return QualityRejection(
                reason=RejectionReason.SKILLS_MISSING_OR_MALFORMED,
                detail=f"Stage {index + 1} has missing or malformed skills",
                stage_index=index,
            )
    return None


def check_distinct_titles(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    """Seniority variants of one title ("Junior X", "X", "Senior X") are not a path."""
    base_titles = {strip_level_qualifiers(s.title).lower() for s in path.stages}
    needed = min(len(path.stages), policy.min_unique_titles)
    if len(base_titles) < needed:
        return QualityRejection(
            reason=RejectionReason.TITLES_NOT_DISTINCT,
            detail=f"Only {len(base_titles)} unique titles out of {len(path.stages)} stages (need {needed})",
        )
    return None


def check_feeder_roles(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    target_base = strip_level_qualifiers(target_role).lower()
    feeders = path.stages[:-1]
    distinct = sum(1 for s in feeders if strip_level_qualifiers(s.title).lower() != target_base)
    if distinct < policy.min_unique_feeders:
        return QualityRejection(
            reason=RejectionReason.INSUFFICIENT_FEEDER_ROLES,
            detail=(
                f"Only {distinct} feeder roles differ from the target "
                f"(need {policy.min_unique_feeders})"
            ),
        )
    return None


def check_modifier_titles(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    target_base = strip_level_qualifiers(target_role).lower()
    modifier_variants = sum(
        1
        for s in path.stages[:-1]
        if strip_level_qualifiers(s.title).lower() == target_base
        and _GENERIC_PREFIX_RE.match(s.title.strip())
    )
    if modifier_variants >= policy.max_modifier_variants:
        return QualityRejection(
            reason=RejectionReason.TOO_MANY_MODIFIER_TITLES,
            detail=(
                f"{modifier_variants} feeder roles reuse the target title with a modifier "
                f"(max {policy.max_modifier_variants - 1})"
            ),
        )
    return None


def required_keyword_matches(domain: DomainProfile, policy: PipelinePolicy) -> int:
    if domain.domain == GENERAL_DOMAIN.domain or not domain.coverage_keywords:
        return 0
    if domain.min_keyword_matches:
        return max(1, math.floor(domain.min_keyword_matches * policy.keyword_reduction_factor))
    return 1


def check_keyword_coverage(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    required = required_keyword_matches(domain, policy)
    if required == 0:
        return None
    matches = sum(1 for s in path.stages if has_domain_keyword(s.title, domain.coverage_keywords))
    if matches < required:
        return QualityRejection(
            reason=RejectionReason.INSUFFICIENT_DOMAIN_SPECIFICITY,
            detail=(
                f"Only {matches} {domain.domain} roles out of {len(path.stages)} "
                f"(need {required})"
            ),
        )
    return None


def check_final_title_similarity(
    path: RawCareerPath, target_role: str, domain: DomainProfile, policy: PipelinePolicy
) -> QualityRejection | None:
    final = path.stages[-1]
    score = title_similarity(final.title, target_role)
    if score < policy.title_similarity_threshold:
        return QualityRejection(
            reason=RejectionReason.FINAL_TITLE_MISMATCH,
            detail=(
                f"Final role {final.title!r} does not match target {target_role!r} "
                f"(similarity {score:.2f} < {policy.title_similarity_threshold:.2f})"
            ),
            stage_index=len(path.stages) - 1,
        )
    return None


# Evaluation order. Action verbs come first so a task-shaped title is always
# reported under that reason.
CHECKS: tuple[Check, ...] = (
    check_action_verb_titles,
    check_stage_count,
    check_description_length,
    check_stage_levels,
    check_stage_skills,
    check_distinct_titles,
    check_feeder_roles,
    check_modifier_titles,
    check_keyword_coverage,
    check_final_title_similarity,
)


def evaluate_quality(
    path: RawCareerPath,
    target_role: str,
    domain: DomainProfile | None = None,
    policy: PipelinePolicy | None = None,
) -> QualityReport:
    """Run every check and collect all failures in order."""
    domain = domain or GENERAL_DOMAIN
    policy = policy or PipelinePolicy()

    rejections = []
    for check in CHECKS:
        rejection = check(path, target_role, domain, policy)
        if rejection is not None:
            rejections.append(rejection)

    report = QualityReport(rejections=rejections)
    if not report.passed:
        logger.debug(
            "Quality guard rejected path for %r: %s",
            target_role, ", ".join(r.value for r in report.reasons),
        )
    return report
