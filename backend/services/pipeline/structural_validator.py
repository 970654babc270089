"""Schema-level acceptance of caller requests and raw model completions.

The two failure modes raise different exceptions because they call for
different remediation: an invalid request is rejected outright, a malformed
completion is retried.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from models.requests import CareerPathRequest
from models.schemas.policy import PipelinePolicy
from models.schemas.raw_output import RawCareerPath
from services.exceptions import InvalidRequestError, MalformedOutputError

logger = logging.getLogger(__name__)


def validate_request(payload: CareerPathRequest | Mapping[str, Any]) -> CareerPathRequest:
    """Validate the caller's request. Raises InvalidRequestError."""
    if isinstance(payload, CareerPathRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise InvalidRequestError(f"Request must be an object, got {type(payload).__name__}")
    try:
        return CareerPathRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestError("Invalid career path request", errors=e.errors()) from e


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def _unwrap_paths(data: Any) -> Any:
    """Accept {"paths": [path, ...]} and use the first path."""
    if isinstance(data, dict) and "paths" in data and not ("stages" in data or "nodes" in data):
        paths = data["paths"]
        if not isinstance(paths, list) or not paths:
            raise MalformedOutputError("Completion contains no paths")
        return paths[0]
    return data


def validate_raw_output(data: Any) -> RawCareerPath:
    """Validate an already-parsed JSON value against the raw path shape."""
    data = _unwrap_paths(data)
    if not isinstance(data, dict):
        raise MalformedOutputError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        return RawCareerPath.model_validate(data)
    except ValidationError as e:
        raise MalformedOutputError(
            f"Completion does not match career path shape ({e.error_count()} errors)",
            errors=e.errors(include_url=False),
        ) from e


def parse_model_output(text: str, policy: PipelinePolicy | None = None) -> RawCareerPath:
    """Parse raw completion text into a RawCareerPath. Raises MalformedOutputError."""
    policy = policy or PipelinePolicy()
    if not isinstance(text, str):
        raise MalformedOutputError(f"Completion must be text, got {type(text).__name__}")
    if len(text) > policy.max_completion_chars:
        raise MalformedOutputError(
            f"Completion is {len(text)} characters (max {policy.max_completion_chars})"
        )

    cleaned = strip_code_fences(text)
    if not cleaned:
        raise MalformedOutputError("Completion is empty")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug("Completion is not valid JSON: %s", e)
        raise MalformedOutputError(f"Completion is not valid JSON: {e.msg}") from e

    return validate_raw_output(data)
