"""Tests for the pipeline orchestrator."""

import asyncio

import pytest

from models.requests import CareerPathRequest, ProfileSignals
from models.responses import CareerPathResult, ProfileGuidanceResult
from models.schemas.policy import PipelinePolicy
from models.schemas.quality import RejectionReason
from models.schemas.telemetry_event import TelemetryEventType
from services.exceptions import CompletionError, CompletionTimeout, InvalidRequestError
from services.pipeline.orchestrator import generate_career_path
from services.pipeline.telemetry import MemorySink, TelemetryRecorder


def _recorder(role: str, sink: MemorySink) -> TelemetryRecorder:
    return TelemetryRecorder(role, user_id="user-1", sinks=[sink])


def _events(sink: MemorySink) -> list[TelemetryEventType]:
    return [e.event for e in sink.events]


class TestAcceptedPath:
    @pytest.mark.asyncio
    async def test_first_attempt_accepted(self, fake_backend, software_completion):
        sink = MemorySink()
        backend = fake_backend([software_completion])

        result = await generate_career_path(
            {"target_role": "Software Engineer"}, backend, recorder=_recorder("Software Engineer", sink)
        )

        assert isinstance(result, CareerPathResult)
        assert result.type == "career_path"
        assert result.target_role == "Software Engineer"
        assert [n.title for n in result.nodes][-1] == "Senior Software Engineer"
        assert result.id.startswith("software-engineer-")
        assert len(backend.prompts) == 1
        assert _events(sink) == [TelemetryEventType.ATTEMPT_STARTED, TelemetryEventType.ATTEMPT_SUCCEEDED]
        assert sink.events[0].prompt_variant == "base"

    @pytest.mark.asyncio
    async def test_recovers_on_refine_attempt(
        self, fake_backend, task_shaped_completion, marketing_completion
    ):
        sink = MemorySink()
        backend = fake_backend([task_shaped_completion, marketing_completion])

        result = await generate_career_path(
            CareerPathRequest(target_role="Marketing Manager"),
            backend,
            recorder=_recorder("Marketing Manager", sink),
        )

        assert isinstance(result, CareerPathResult)
        assert len(backend.prompts) == 2
        assert "previous answer was rejected" in backend.prompts[1]
        assert _events(sink) == [
            TelemetryEventType.ATTEMPT_STARTED,
            TelemetryEventType.ATTEMPT_REJECTED,
            TelemetryEventType.ATTEMPT_STARTED,
            TelemetryEventType.ATTEMPT_SUCCEEDED,
        ]
        assert sink.events[1].reason == RejectionReason.ACTION_VERB_TITLE
        assert sink.events[2].prompt_variant == "refine"

    @pytest.mark.asyncio
    async def test_backend_failures_are_retried(self, fake_backend, software_completion):
        sink = MemorySink()
        backend = fake_backend([CompletionTimeout("slow"), "", software_completion])

        result = await generate_career_path(
            {"target_role": "Software Engineer"}, backend, recorder=_recorder("Software Engineer", sink)
        )

        assert isinstance(result, CareerPathResult)
        rejected = [e.reason for e in sink.events if e.event == TelemetryEventType.ATTEMPT_REJECTED]
        assert rejected == [RejectionReason.BACKEND_TIMEOUT, RejectionReason.EMPTY_COMPLETION]


class TestFallback:
    @pytest.mark.asyncio
    async def test_task_shaped_output_never_becomes_a_path(self, fake_backend, task_shaped_completion):
        sink = MemorySink()
        backend = fake_backend([task_shaped_completion] * 3)

        result = await generate_career_path(
            {"target_role": "Marketing Specialist"},
            backend,
            recorder=_recorder("Marketing Specialist", sink),
        )

        assert isinstance(result, ProfileGuidanceResult)
        assert result.type == "profile_guidance"
        assert 3 <= len(result.tasks) <= 5
        assert len(backend.prompts) == 3
        assert _events(sink)[-1] == TelemetryEventType.FALLBACK_USED
        assert sink.events[-1].attempt == 3
        assert sink.events[-1].reason == RejectionReason.ACTION_VERB_TITLE

    @pytest.mark.asyncio
    async def test_timeout_on_every_attempt(self, fake_backend):
        sink = MemorySink()
        backend = fake_backend([CompletionTimeout("slow")] * 3)

        result = await generate_career_path(
            {"target_role": "Software Engineer"}, backend, recorder=_recorder("Software Engineer", sink)
        )

        assert isinstance(result, ProfileGuidanceResult)
        assert result.message
        assert result.tasks
        assert sink.events[-1].reason == RejectionReason.BACKEND_TIMEOUT
        assert _events(sink).count(TelemetryEventType.ATTEMPT_REJECTED) == 3

    @pytest.mark.asyncio
    async def test_exhausted_budget_with_mixed_failures(self, fake_backend):
        backend = fake_backend([
            CompletionError("quota"),
            "I cannot help with that.",
            RuntimeError("connection reset"),
        ])
        sink = MemorySink()

        result = await generate_career_path(
            {"target_role": "Data Scientist"}, backend, recorder=_recorder("Data Scientist", sink)
        )

        assert isinstance(result, ProfileGuidanceResult)
        rejected = [e.reason for e in sink.events if e.event == TelemetryEventType.ATTEMPT_REJECTED]
        assert rejected == [
            RejectionReason.BACKEND_ERROR,
            RejectionReason.MALFORMED_OUTPUT,
            RejectionReason.BACKEND_ERROR,
        ]

    @pytest.mark.asyncio
    async def test_policy_limits_attempts(self, fake_backend, task_shaped_completion):
        backend = fake_backend([task_shaped_completion] * 5)
        result = await generate_career_path(
            {"target_role": "Marketing Specialist"},
            backend,
            policy=PipelinePolicy(max_attempts=1),
            recorder=TelemetryRecorder("Marketing Specialist", sinks=[]),
        )
        assert isinstance(result, ProfileGuidanceResult)
        assert len(backend.prompts) == 1

    @pytest.mark.asyncio
    async def test_no_backend_returns_guidance(self):
        sink = MemorySink()
        result = await generate_career_path(
            {"target_role": "Data Scientist"}, None, recorder=_recorder("Data Scientist", sink)
        )

        assert isinstance(result, ProfileGuidanceResult)
        assert _events(sink) == [TelemetryEventType.FALLBACK_USED]
        assert sink.events[0].attempt == 0
        assert sink.events[0].reason == RejectionReason.BACKEND_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_profile_signals_shape_guidance(self):
        profile = ProfileSignals(
            has_work_history=True,
            has_domain_experience=True,
            skills_count=10,
            has_domain_skills=True,
            has_career_goal=True,
        )
        result = await generate_career_path(
            {"target_role": "Data Scientist"},
            None,
            profile=profile,
            recorder=TelemetryRecorder("Data Scientist", sinks=[]),
        )
        assert "career goal" not in result.message
        assert "profile summary" in result.message


class TestInvalidRequest:
    @pytest.mark.asyncio
    async def test_blank_role_raises_before_any_attempt(self, fake_backend, software_completion):
        backend = fake_backend([software_completion])
        with pytest.raises(InvalidRequestError):
            await generate_career_path({"target_role": "   "}, backend)
        assert backend.prompts == []


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        class _HangingBackend:
            async def complete(self, prompt):
                await asyncio.sleep(10)
                return ""

        task = asyncio.create_task(
            generate_career_path(
                {"target_role": "Data Scientist"},
                _HangingBackend(),
                recorder=TelemetryRecorder("Data Scientist", sinks=[]),
            )
        )
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
