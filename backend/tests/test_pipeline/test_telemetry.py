"""Tests for the telemetry recorder and its sinks."""

import logging

from models.schemas.quality import QualityRejection, RejectionReason
from models.schemas.telemetry_event import TelemetryEventType
from services.pipeline.telemetry import LoggingSink, MemorySink, TelemetryRecorder


class _BrokenSink:
    def emit(self, event):
        raise RuntimeError("sink down")


class TestTelemetryRecorder:
    def test_events_carry_caller_and_attempt(self):
        sink = MemorySink()
        recorder = TelemetryRecorder("Data Scientist", user_id="user-1", sinks=[sink])

        recorder.attempt_started(1, "base")
        recorder.attempt_rejected(
            1, "base", QualityRejection(reason=RejectionReason.MALFORMED_OUTPUT, detail="not JSON")
        )
        recorder.attempt_started(2, "refine")
        recorder.attempt_succeeded(2, "refine")

        events = sink.events
        assert [e.event for e in events] == [
            TelemetryEventType.ATTEMPT_STARTED,
            TelemetryEventType.ATTEMPT_REJECTED,
            TelemetryEventType.ATTEMPT_STARTED,
            TelemetryEventType.ATTEMPT_SUCCEEDED,
        ]
        assert all(e.user_id == "user-1" and e.target_role == "Data Scientist" for e in events)
        assert events[1].reason == RejectionReason.MALFORMED_OUTPUT
        assert events[1].outcome == "failure"
        assert events[3].outcome == "success"
        assert events[3].prompt_variant == "refine"
        assert events[3].duration_ms is not None

    def test_fallback_event(self):
        sink = MemorySink()
        recorder = TelemetryRecorder("Data Scientist", sinks=[sink])
        recorder.fallback_used(3, QualityRejection(reason=RejectionReason.BACKEND_TIMEOUT))

        event = sink.events[0]
        assert event.event == TelemetryEventType.FALLBACK_USED
        assert event.attempt == 3
        assert event.reason == RejectionReason.BACKEND_TIMEOUT

    def test_broken_sink_does_not_raise(self):
        sink = MemorySink()
        recorder = TelemetryRecorder("Data Scientist", sinks=[_BrokenSink(), sink])
        recorder.attempt_started(1, "base")
        assert len(sink.events) == 1

    def test_default_sink_logs(self, caplog):
        recorder = TelemetryRecorder("Data Scientist")
        with caplog.at_level(logging.INFO, logger="telemetry"):
            recorder.attempt_rejected(
                1, "base", QualityRejection(reason=RejectionReason.ACTION_VERB_TITLE)
            )

        assert isinstance(recorder.sinks[0], LoggingSink)
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "action_verb_title" in record.getMessage()
        assert record.telemetry["target_role"] == "Data Scientist"
