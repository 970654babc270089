"""Telemetry recorder for generation attempts.

The recorder fans events out to sinks; it knows nothing about where they end
up. ``LoggingSink`` is the default, ``MemorySink`` keeps events in a list.
"""

import logging
import time
from typing import Protocol

from models.schemas.quality import QualityRejection
from models.schemas.telemetry_event import TelemetryEvent, TelemetryEventType

logger = logging.getLogger(__name__)
telemetry_logger = logging.getLogger("telemetry")


class TelemetrySink(Protocol):
    def emit(self, event: TelemetryEvent) -> None: ...


class LoggingSink:
    """Write each event as one log line with the fields in ``extra``."""

    def emit(self, event: TelemetryEvent) -> None:
        level = logging.WARNING if event.outcome == "failure" else logging.INFO
        telemetry_logger.log(
            level,
            "career_path.%s attempt=%d reason=%s",
            event.event.value,
            event.attempt,
            event.reason.value if event.reason else "-",
            extra={"telemetry": event.model_dump(mode="json")},
        )


class MemorySink:
    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def emit(self, event: TelemetryEvent) -> None:
        self.events.append(event)


class TelemetryRecorder:
    """Request-scoped recorder bound to one caller and target role."""

    def __init__(
        self,
        target_role: str,
        user_id: str | None = None,
        sinks: list[TelemetrySink] | None = None,
    ) -> None:
        self.target_role = target_role
        self.user_id = user_id
        self.sinks: list[TelemetrySink] = sinks if sinks is not None else [LoggingSink()]
        self._started = time.perf_counter()

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self._started) * 1000, 2)

    def _emit(self, event: TelemetryEvent) -> None:
        for sink in self.sinks:
            try:
                sink.emit(event)
            except Exception:
                # A broken sink must not fail the request
                logger.exception("Telemetry sink %s failed", type(sink).__name__)

    def attempt_started(self, attempt: int, prompt_variant: str) -> None:
        self._emit(TelemetryEvent(
            event=TelemetryEventType.ATTEMPT_STARTED,
            user_id=self.user_id,
            target_role=self.target_role,
            attempt=attempt,
            prompt_variant=prompt_variant,
        ))

    def attempt_succeeded(self, attempt: int, prompt_variant: str) -> None:
        self._emit(TelemetryEvent(
            event=TelemetryEventType.ATTEMPT_SUCCEEDED,
            user_id=self.user_id,
            target_role=self.target_role,
            attempt=attempt,
            outcome="success",
            prompt_variant=prompt_variant,
            duration_ms=self._elapsed_ms(),
        ))

    def attempt_rejected(self, attempt: int, prompt_variant: str, rejection: QualityRejection) -> None:
        self._emit(TelemetryEvent(
            event=TelemetryEventType.ATTEMPT_REJECTED,
            user_id=self.user_id,
            target_role=self.target_role,
            attempt=attempt,
            outcome="failure",
            reason=rejection.reason,
            detail=rejection.detail,
            prompt_variant=prompt_variant,
        ))

    def fallback_used(self, attempts: int, last_rejection: QualityRejection | None) -> None:
        self._emit(TelemetryEvent(
            event=TelemetryEventType.FALLBACK_USED,
            user_id=self.user_id,
            target_role=self.target_role,
            attempt=attempts,
            outcome="failure",
            reason=last_rejection.reason if last_rejection else None,
            detail=last_rejection.detail if last_rejection else "",
            duration_ms=self._elapsed_ms(),
        ))
