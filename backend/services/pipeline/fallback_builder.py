"""Fallback builder: profile guidance when no attempt yields a career path.

Guidance is its own result type with task-shaped fields only (category,
priority, duration in minutes, action link). It is never dressed up as path
nodes.
"""

import logging
from dataclasses import dataclass

from models.requests import ProfileSignals
from models.responses import (
    ProfileGuidanceResult,
    ProfileTask,
    TaskCategory,
    TaskPriority,
)
from models.schemas.policy import PipelinePolicy
from services.career_domains import GENERAL_DOMAIN, DomainProfile
from services.pipeline.mapper import slugify

logger = logging.getLogger(__name__)

PROFILE_URL = "/career-profile"
GOALS_URL = "/goals"
DOCUMENTS_URL = "/documents"
CAREER_PATH_URL = "/career-path"

_PRIORITY_RANK = {TaskPriority.HIGH: 0, TaskPriority.MEDIUM: 1, TaskPriority.LOW: 2}


@dataclass
class _Gap:
    """A missing profile section and the task that closes it."""
    missing: str  # phrase used in the explanation message
    title: str
    description: str
    category: TaskCategory
    priority: TaskPriority
    minutes: int
    action_url: str


def _find_gaps(signals: ProfileSignals, target_role: str, domain: DomainProfile) -> list[_Gap]:
    area = domain.display_name
    gaps: list[_Gap] = []

    if not (signals.has_work_history and signals.has_domain_experience):
        gaps.append(_Gap(
            missing="domain-relevant work history",
            title=f"Showcase {area} Experience",
            description=(
                f"Open Career Profile > Work History and add accomplishment-driven bullets "
                f"that highlight {area.lower()} impact aligned with {target_role}."
            ),
            category=TaskCategory.WORK_HISTORY,
            priority=TaskPriority.HIGH,
            minutes=20,
            action_url=PROFILE_URL,
        ))

    if not signals.has_domain_skills or signals.skills_count < 5:
        examples = ", ".join(domain.skill_recommendations[:2])
        gaps.append(_Gap(
            missing="domain-specific skills",
            title=f"Expand {area} Skill Highlights",
            description=(
                f"Update Career Profile > Skills with the capabilities expected for {target_role}"
                + (f" (e.g., {examples})." if examples else ".")
            ),
            category=TaskCategory.SKILLS,
            priority=TaskPriority.HIGH,
            minutes=10,
            action_url=PROFILE_URL,
        ))

    if not signals.has_career_goal:
        gaps.append(_Gap(
            missing="career goal",
            title="Set a Targeted Career Goal",
            description=(
                f"Head to Goals > Add Goal and describe why you are pursuing {target_role} "
                "so generated paths can be steered toward it."
            ),
            category=TaskCategory.CAREER_GOALS,
            priority=TaskPriority.HIGH,
            minutes=15,
            action_url=GOALS_URL,
        ))

    if not signals.has_summary:
        gaps.append(_Gap(
            missing="profile summary",
            title="Write Your Profile Summary",
            description=(
                "Add a concise summary in Career Profile > Summary that signals the scope "
                "of teams, budgets, and results you have delivered."
            ),
            category=TaskCategory.PROFILE_SUMMARY,
            priority=TaskPriority.MEDIUM,
            minutes=15,
            action_url=PROFILE_URL,
        ))

    if not signals.has_education:
        gaps.append(_Gap(
            missing="education history",
            title="Add Education and Training",
            description="List degrees, bootcamps, and courses in Career Profile > Education.",
            category=TaskCategory.EDUCATION,
            priority=TaskPriority.MEDIUM,
            minutes=10,
            action_url=PROFILE_URL,
        ))

    if not signals.has_resume:
        gaps.append(_Gap(
            missing="resume",
            title="Upload a Current Resume",
            description="Upload your latest resume in Documents so your experience can be read in full.",
            category=TaskCategory.DOCUMENTS,
            priority=TaskPriority.MEDIUM,
            minutes=5,
            action_url=DOCUMENTS_URL,
        ))

    if not signals.has_industry:
        gaps.append(_Gap(
            missing="industry focus",
            title="Specify Industry Focus",
            description=(
                "Set your primary industry in Career Profile > Basics so recommendations "
                "stay sector-appropriate."
            ),
            category=TaskCategory.PROFILE_BASICS,
            priority=TaskPriority.LOW,
            minutes=2,
            action_url=PROFILE_URL,
        ))

    # Stable sort: priority first, then the impact order above
    gaps.sort(key=lambda g: _PRIORITY_RANK[g.priority])
    return gaps


_FILLER_TASKS = (
    ("Highlight {area} Metrics", "Document measurable outcomes (revenue, retention, efficiency) in your work history."),
    ("Add Strategic Initiatives", "Describe initiatives you led and the stakeholders you influenced."),
    ("Link Cross-Functional Wins", "Note projects where you partnered with other teams and what changed as a result."),
)


def build_profile_guidance(
    target_role: str,
    signals: ProfileSignals | None = None,
    domain: DomainProfile | None = None,
    policy: PipelinePolicy | None = None,
    guidance_id: str | None = None,
) -> ProfileGuidanceResult:
    """Build 3-5 profile tasks plus an explanation of why no path was produced.

    When no signals are available every section is treated as missing.
    """
    signals = signals or ProfileSignals()
    domain = domain or GENERAL_DOMAIN
    policy = policy or PipelinePolicy()
    base_id = slugify(f"{target_role}-profile") or "profile"

    gaps = _find_gaps(signals, target_role, domain)
    # One slot is always reserved for the final "regenerate" step
    selected = gaps[: policy.max_guidance_tasks - 1]

    tasks = [
        ProfileTask(
            id=f"{base_id}-task-{i + 1}",
            title=gap.title,
            description=gap.description,
            category=gap.category,
            priority=gap.priority,
            estimated_duration_minutes=gap.minutes,
            action_url=gap.action_url,
        )
        for i, gap in enumerate(selected)
    ]

    filler_index = 0
    while len(tasks) < policy.min_guidance_tasks - 1:
        title, description = _FILLER_TASKS[filler_index % len(_FILLER_TASKS)]
        tasks.append(ProfileTask(
            id=f"{base_id}-task-filler-{filler_index + 1}",
            title=title.format(area=domain.display_name),
            description=description,
            category=TaskCategory.PROFILE_ENHANCEMENT,
            priority=TaskPriority.MEDIUM,
            estimated_duration_minutes=10,
            action_url=PROFILE_URL,
        ))
        filler_index += 1

    tasks.append(ProfileTask(
        id=f"{base_id}-task-final",
        title=f"Regenerate the {target_role} Path",
        description=(
            "Once your profile reflects these updates, generate the career path again "
            "for role-by-role recommendations."
        ),
        category=TaskCategory.NEXT_STEPS,
        priority=TaskPriority.HIGH,
        estimated_duration_minutes=5,
        action_url=CAREER_PATH_URL,
    ))

    missing = [gap.missing for gap in gaps]
    if missing:
        message = (
            f'We couldn\'t generate a reliable career path for "{target_role}". '
            f"Your profile is missing: {', '.join(missing)}. "
            "Complete the tasks below, then generate the path again."
        )
    else:
        message = (
            f'We couldn\'t generate a reliable career path for "{target_role}" right now. '
            "Complete the profile improvements below and try again."
        )

    logger.info("Built profile guidance for %r with %d tasks", target_role, len(tasks))
    return ProfileGuidanceResult(
        id=guidance_id or f"{base_id}-guidance",
        target_role=target_role,
        message=message,
        tasks=tasks,
    )
