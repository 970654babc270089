"""Prompt templates for career path generation."""

from models.schemas.quality import QualityRejection, RejectionReason
from services.career_domains import GENERAL_DOMAIN, DomainProfile

PROMPT_VARIANTS = ("base", "refine")

SYSTEM_INSTRUCTION = "You produce strictly valid JSON for apps to consume."

# How to steer the next attempt after a specific failure
_REFINE_HINTS: dict[RejectionReason, str] = {
    RejectionReason.ACTION_VERB_TITLE: (
        "Every title must be a job title a person holds (e.g. \"Marketing Coordinator\"), "
        "never a task such as \"Review Recent Achievements\" or \"Update LinkedIn Profile\"."
    ),
    RejectionReason.INSUFFICIENT_STAGES: "Return at least {min_stages} stages.",
    RejectionReason.DESCRIPTION_TOO_SHORT: "Every description must be a full sentence.",
    RejectionReason.INVALID_LEVEL_VALUES: (
        "Every stage level must be one of entry, mid, senior, lead or executive."
    ),
    RejectionReason.SKILLS_MISSING_OR_MALFORMED: (
        "Every stage needs a skills list of objects with a name and a level of basic, intermediate or advanced."
    ),
    RejectionReason.TITLES_NOT_DISTINCT: (
        "Use distinct job titles; do not repeat one title with Junior/Senior/Lead modifiers."
    ),
    RejectionReason.INSUFFICIENT_FEEDER_ROLES: (
        "At least two earlier stages must be different roles from the target role."
    ),
    RejectionReason.TOO_MANY_MODIFIER_TITLES: (
        "Earlier stages must not simply be the target title with seniority modifiers."
    ),
    RejectionReason.INSUFFICIENT_DOMAIN_SPECIFICITY: (
        "Use industry-standard titles from the {domain} discipline."
    ),
    RejectionReason.FINAL_TITLE_MISMATCH: 'The last stage title must be exactly "{target_role}".',
    RejectionReason.MALFORMED_OUTPUT: "Return only the JSON object, with no commentary or code fences.",
    RejectionReason.EMPTY_COMPLETION: "Return only the JSON object, with no commentary or code fences.",
}


def _refine_section(
    target_role: str,
    domain: DomainProfile,
    min_stages: int,
    previous: QualityRejection | None,
) -> str:
    lines = [
        "Reinforce quality rules:",
        "- The earlier stages must be distinct feeder roles that prepare for the target scope.",
        "- Keep progression realistic, gradually increasing scope, leadership, or specialization.",
        f'- Order stages from earliest to latest, ending with the exact target role "{target_role}".',
    ]
    if previous is not None and previous.reason in _REFINE_HINTS:
        hint = _REFINE_HINTS[previous.reason].format(
            min_stages=min_stages, domain=domain.domain, target_role=target_role
        )
        lines.append(f"- The previous answer was rejected: {hint}")
    return "\n".join(lines)


def build_career_path_prompt(
    target_role: str,
    domain: DomainProfile | None = None,
    variant: str = "base",
    region: str | None = None,
    min_stages: int = 4,
    previous_rejection: QualityRejection | None = None,
) -> str:
    """Build the completion prompt. ``refine`` adds rules and the last failure."""
    if variant not in PROMPT_VARIANTS:
        raise ValueError(f"Unknown prompt variant: {variant!r}")
    domain = domain or GENERAL_DOMAIN

    if domain.domain == GENERAL_DOMAIN.domain:
        domain_hint = "Focus on broadly applicable business roles when domain nuances are unclear."
    else:
        domain_hint = (
            f"The target role lives within the {domain.domain} discipline; "
            "use industry-standard roles from that space."
        )

    example = ""
    if domain.prompt_examples:
        example = (
            f"Example progression for context: {' > '.join(domain.prompt_examples)}. "
            "Use this only as inspiration and craft your own realistic sequence."
        )

    region_hint = f"Salary figures should reflect the {region} market." if region else "Salary figures in USD."

    if variant == "refine":
        rules = _refine_section(target_role, domain, min_stages, previous_rejection)
    else:
        rules = "\n".join([
            "Quality rules:",
            f'- Provide {min_stages} to 6 stages, ending with the target role "{target_role}".',
            "- At least two earlier stages must be different job titles from the target role.",
            "- Avoid repeating the same base title with only seniority modifiers.",
        ])

    return f"""You are a career path analyst who designs realistic, data-backed progressions that people actually follow in industry.
Target role: "{target_role}"
{domain_hint}
{example}
{region_hint}

Generate ordered stages that show how a professional typically grows into this target role. Each stage must include:
- title (distinct, industry-recognizable job title)
- level (one of entry, mid, senior, lead, executive)
- description (1-2 sentences on why this stage matters on the journey)
- years_experience (string like "3-5 years")
- salary (range string like "$80,000 - $100,000")
- skills (3-6 core skills for the stage, each with a name and a level of basic, intermediate, or advanced)
- certifications (0-2 objects with name, issuer, and official url)

{rules}

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "target_role": "{target_role}",
  "stages": [
    {{
      "title": "<job title>",
      "level": "<entry|mid|senior|lead|executive>",
      "description": "<1-2 sentences>",
      "years_experience": "<e.g. 2-4 years>",
      "salary": "<e.g. $70,000 - $90,000>",
      "skills": [{{"name": "<skill>", "level": "<basic|intermediate|advanced>"}}],
      "certifications": [{{"name": "<name>", "issuer": "<issuer>", "url": "<https://...>"}}]
    }}
  ]
}}"""
