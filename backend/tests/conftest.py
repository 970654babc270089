"""Shared test fixtures: sample completions and a scripted completion backend."""

import json

import pytest

from services.exceptions import CompletionError


_SKILL_LEVELS = {"entry": "basic", "mid": "intermediate"}


def _stage(
    title: str, level: str, description: str, years: str, salary: str, skills: list[str], certifications=None
) -> dict:
    skill_level = _SKILL_LEVELS.get(level, "advanced")
    return {
        "title": title,
        "level": level,
        "description": description,
        "years_experience": years,
        "salary": salary,
        "skills": [{"name": name, "level": skill_level} for name in skills],
        "certifications": certifications or [],
    }


SOFTWARE_STAGES = [
    _stage(
        "IT Support Specialist",
        "entry",
        "Builds troubleshooting habits and exposure to production systems.",
        "0-2 years", "$45,000 - $60,000", ["Troubleshooting", "Networking", "Scripting"],
        [{"name": "CompTIA A+", "issuer": "CompTIA", "url": "https://www.comptia.org/certifications/a"}],
    ),
    _stage(
        "Junior Software Developer",
        "entry",
        "Ships small features under review and learns the team's codebase.",
        "1-3 years", "$65,000 - $85,000", ["Python", "Git", "Unit Testing"],
    ),
    _stage(
        "Software Engineer",
        "mid",
        "Owns features end to end and takes part in on-call rotations.",
        "3-5 years", "$95,000 - $125,000", ["System Design", "APIs", "Code Review"],
    ),
    _stage(
        "Software Engineer II",
        "mid",
        "Leads medium-sized projects and mentors newer engineers.",
        "4-6 years", "$120,000 - $150,000", ["Mentoring", "Distributed Systems"],
        [{"name": "AWS Certified Developer", "issuer": "Amazon", "url": "https://aws.amazon.com/certification/"}],
    ),
    _stage(
        "Senior Software Engineer",
        "senior",
        "Sets technical direction for a product area and reviews designs.",
        "6-9 years", "$150,000 - $190,000", ["Architecture", "Technical Leadership"],
    ),
]

MARKETING_STAGES = [
    _stage(
        "Marketing Coordinator",
        "entry",
        "Supports campaign logistics and reporting across channels.",
        "0-2 years", "$45k-60k", ["Campaign Operations", "Reporting"],
    ),
    _stage(
        "Content Specialist",
        "mid",
        "Writes and edits long-form content that drives inbound demand.",
        "2-4 years", "$55,000 - $70,000", ["Copywriting", "SEO"],
    ),
    _stage(
        "Digital Marketing Specialist",
        "mid",
        "Runs paid and organic programs and owns channel performance.",
        "3-5 years", "$65,000 - $85,000", ["Paid Media", "Analytics"],
    ),
    _stage(
        "Marketing Manager",
        "senior",
        "Plans the quarterly marketing calendar and manages a small team.",
        "5-8 years", "$90,000 - $120,000", ["Budgeting", "Team Leadership"],
    ),
]

TASK_SHAPED_STAGES = [
    _stage(
        "Update LinkedIn Profile",
        "entry",
        "Refresh your headline and summary to reflect marketing focus.",
        "30 minutes", "Profile update", ["LinkedIn"],
    ),
    _stage(
        "Review Recent Achievements",
        "entry",
        "List campaigns you contributed to and their measurable results.",
        "45 minutes", "Profile update", ["Reflection"],
    ),
    _stage(
        "Marketing Coordinator",
        "entry",
        "Supports campaign logistics and reporting across channels.",
        "0-2 years", "$45,000 - $60,000", ["Campaigns"],
    ),
    _stage(
        "Marketing Specialist",
        "mid",
        "Owns channel programs and reports on their performance.",
        "2-4 years", "$60,000 - $75,000", ["Channel Marketing"],
    ),
]


class FakeBackend:
    """Completion backend that replays scripted responses in order.

    A scripted exception is raised instead of returned. Prompts are kept for
    inspection.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise CompletionError("No scripted response left")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def software_path() -> dict:
    return {"target_role": "Software Engineer", "stages": [dict(s) for s in SOFTWARE_STAGES]}


@pytest.fixture
def software_completion(software_path) -> str:
    return json.dumps(software_path)


@pytest.fixture
def marketing_path() -> dict:
    return {"target_role": "Marketing Manager", "stages": [dict(s) for s in MARKETING_STAGES]}


@pytest.fixture
def marketing_completion(marketing_path) -> str:
    return json.dumps(marketing_path)


@pytest.fixture
def task_shaped_completion() -> str:
    return json.dumps({"target_role": "Marketing Specialist", "stages": TASK_SHAPED_STAGES})


@pytest.fixture
def fake_backend():
    """Factory: ``fake_backend([text, exc, ...])``."""
    return FakeBackend
