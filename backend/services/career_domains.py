"""Career domains: keyword sets used for domain-specificity checks and prompts."""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class DomainProfile:
    domain: str
    display_name: str
    keywords: tuple[str, ...]  # matched against the requested role to pick a domain
    quality_keywords: tuple[str, ...] = ()  # expected in generated stage titles
    min_keyword_matches: int = 0
    prompt_examples: tuple[str, ...] = ()
    skill_recommendations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def coverage_keywords(self) -> tuple[str, ...]:
        return self.quality_keywords or self.keywords


DOMAINS: list[DomainProfile] = [
    DomainProfile(
        domain="data",
        display_name="Data & Analytics",
        keywords=(
            "data", "analytics", "scientist", "bi analyst", "business intelligence",
            "machine learning", "ml", "ai", "statistician",
        ),
        quality_keywords=(
            "data", "analytics", "analysis", "scientist", "science", "machine learning",
            "ml", "ai", "business intelligence", "bi",
        ),
        min_keyword_matches=3,
        prompt_examples=(
            "Data Analyst Intern", "Business Intelligence Analyst",
            "Senior Data Scientist", "Director of Data Science",
        ),
        skill_recommendations=("Advanced Analytics", "Experimentation", "Business Insight"),
    ),
    DomainProfile(
        domain="product",
        display_name="Product Management",
        keywords=("product", "pm", "product manager", "product owner", "product lead", "product director"),
        quality_keywords=("product", "pm", "product manager", "product owner", "roadmap", "portfolio", "product lead"),
        min_keyword_matches=3,
        prompt_examples=("Product Research Assistant", "Business Analyst", "Product Manager", "Director of Product"),
        skill_recommendations=("Portfolio Roadmapping", "Customer Discovery", "Experiment Design"),
    ),
    DomainProfile(
        domain="design",
        display_name="Design",
        keywords=("design", "designer", "ux", "ui", "product design", "visual", "interaction"),
        quality_keywords=(
            "design", "designer", "ux", "ui", "product", "experience", "visual",
            "interaction", "creative",
        ),
        min_keyword_matches=3,
        prompt_examples=("Design Apprentice", "UX/UI Designer", "Senior Product Designer", "Director of Design"),
        skill_recommendations=("Experience Strategy", "Design Systems", "Stakeholder Workshops"),
    ),
    DomainProfile(
        domain="marketing",
        display_name="Marketing",
        keywords=("marketing", "growth", "content", "brand", "demand", "communications"),
        quality_keywords=(
            "marketing", "brand", "growth", "demand", "content", "communications",
            "campaign", "go-to-market", "digital",
        ),
        min_keyword_matches=3,
        prompt_examples=(
            "Marketing Coordinator", "Digital Marketing Specialist",
            "Growth Marketing Manager", "Vice President of Marketing",
        ),
        skill_recommendations=("Growth Strategy", "Brand Positioning", "Revenue Planning"),
    ),
    DomainProfile(
        domain="sales",
        display_name="Sales",
        keywords=("sales", "account executive", "ae", "business development", "bdr", "sdr", "revenue"),
        quality_keywords=(
            "sales", "account", "business development", "revenue", "customer",
            "pipeline", "quota", "seller",
        ),
        min_keyword_matches=3,
        prompt_examples=(
            "Sales Development Representative", "Account Executive",
            "Sales Manager", "Vice President of Sales",
        ),
        skill_recommendations=("Enterprise Deal Strategy", "Pipeline Forecasting", "Team Coaching"),
    ),
    DomainProfile(
        domain="security",
        display_name="Security",
        keywords=("security", "cyber", "infosec", "information security", "soc", "cloud security"),
        quality_keywords=(
            "security", "cyber", "infosec", "information security", "soc", "threat",
            "incident", "risk", "governance",
        ),
        min_keyword_matches=3,
        prompt_examples=(
            "IT Support Analyst", "Security Operations Analyst",
            "Security Engineer", "Chief Information Security Officer",
        ),
        skill_recommendations=("Risk Governance", "Incident Response", "Security Architecture"),
    ),
    DomainProfile(
        domain="people",
        display_name="People Operations",
        keywords=("people", "talent", "recruiting", "hr", "human resources", "people ops"),
        quality_keywords=(
            "people", "talent", "recruit", "hr", "human resource", "people operations",
            "people ops", "employee",
        ),
        min_keyword_matches=3,
        prompt_examples=(
            "HR Coordinator", "People Operations Specialist",
            "HR Business Partner", "Vice President of People",
        ),
        skill_recommendations=("Talent Strategy", "Org Design", "Change Management"),
    ),
    DomainProfile(
        domain="finance",
        display_name="Finance",
        keywords=("finance", "financial", "accounting", "fp&a", "controller", "analyst", "auditor"),
        quality_keywords=(
            "finance", "financial", "accounting", "analyst", "fp&a", "controller",
            "audit", "treasury", "budget",
        ),
        min_keyword_matches=3,
        prompt_examples=(
            "Finance Analyst Intern", "Financial Analyst",
            "Finance Manager", "Chief Financial Officer",
        ),
        skill_recommendations=("Strategic Finance", "Scenario Modeling", "Stakeholder Reporting"),
    ),
    DomainProfile(
        domain="software",
        display_name="Engineering",
        keywords=(
            "software", "developer", "engineer", "frontend", "front-end", "backend",
            "back-end", "fullstack", "full-stack", "mobile", "ios", "android", "qa",
            "sdet", "devops", "platform",
        ),
        quality_keywords=(
            "software", "developer", "engineering", "engineer", "frontend", "backend",
            "full stack", "mobile", "devops", "qa", "platform",
        ),
        min_keyword_matches=3,
        prompt_examples=(
            "IT Support Specialist", "Software Developer",
            "Senior Software Engineer", "Director of Engineering",
        ),
        skill_recommendations=("System Architecture", "Engineering Leadership", "Technical Strategy"),
    ),
    DomainProfile(
        domain="operations",
        display_name="Operations",
        keywords=(
            "operations", "program", "project", "project manager", "program manager",
            "chief of staff", "business operations", "strategy",
        ),
        quality_keywords=(
            "operations", "program", "project", "delivery", "strategy",
            "chief of staff", "business operations", "process",
        ),
        min_keyword_matches=3,
        prompt_examples=("Operations Coordinator", "Project Coordinator", "Program Manager", "Head of Operations"),
        skill_recommendations=("Program Leadership", "Cross-Functional Alignment", "Process Optimization"),
    ),
]

GENERAL_DOMAIN = DomainProfile(
    domain="general",
    display_name="Career",
    keywords=(),
    min_keyword_matches=0,
    skill_recommendations=("Career Storytelling", "Stakeholder Alignment", "Strategic Planning"),
)

_LEVEL_PREFIX_RE = re.compile(
    r"^(senior|sr\.?|junior|jr\.?|lead|principal|staff|associate|assistant|apprentice"
    r"|mid-level|midlevel|mid level|entry-level|entry level)\s+",
    re.IGNORECASE,
)
_NUMERAL_SUFFIX_RE = re.compile(r"\b(i{1,3}|iv|v)$", re.IGNORECASE)


def _contains_keyword(text: str, keyword: str) -> bool:
    # Short keywords ("ai", "qa", "ui") only count as whole words
    if len(keyword) <= 3:
        return re.search(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9])", text) is not None
    return keyword in text


def has_domain_keyword(text: str, keywords: tuple[str, ...] | list[str]) -> bool:
    lowered = (text or "").lower()
    return any(_contains_keyword(lowered, kw) for kw in keywords)


def select_domain(target_role: str) -> DomainProfile:
    """Pick the domain with the most role keywords in the target role.

    Ties go to the earlier domain. Software sits late in DOMAINS because
    "engineer" and "developer" also appear in data, security and other roles.
    """
    lowered = (target_role or "").lower()
    best, best_hits = GENERAL_DOMAIN, 0
    for profile in DOMAINS:
        hits = sum(1 for kw in profile.keywords if _contains_keyword(lowered, kw))
        if hits > best_hits:
            best, best_hits = profile, hits
    return best


def strip_level_qualifiers(title: str) -> str:
    """Drop seniority prefixes and roman-numeral suffixes: "Senior Data Analyst II" -> "Data Analyst"."""
    result = (title or "").strip()
    while _LEVEL_PREFIX_RE.match(result):
        result = _LEVEL_PREFIX_RE.sub("", result, count=1)
    result = _NUMERAL_SUFFIX_RE.sub("", result).strip()
    return result or (title or "").strip()
