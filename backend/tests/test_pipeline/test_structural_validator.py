"""Tests for request validation and raw completion parsing."""

import json

import pytest

from models.requests import CareerPathRequest
from models.schemas.policy import PipelinePolicy
from models.schemas.raw_output import RawCareerPath, RawCertification, RawSkill
from services.exceptions import InvalidRequestError, MalformedOutputError
from services.pipeline.structural_validator import (
    parse_model_output,
    strip_code_fences,
    validate_request,
)


class TestValidateRequest:
    def test_accepts_mapping_and_normalizes_whitespace(self):
        request = validate_request({"target_role": "  Data   Scientist ", "region": "  "})
        assert request.target_role == "Data Scientist"
        assert request.region is None

    def test_passes_through_model_instance(self):
        request = CareerPathRequest(target_role="Product Manager")
        assert validate_request(request) is request

    @pytest.mark.parametrize("payload", [
        {},
        {"target_role": ""},
        {"target_role": "   "},
        {"target_role": "x" * 201},
        {"target_role": 42},
    ])
    def test_rejects_invalid_payloads(self, payload):
        with pytest.raises(InvalidRequestError) as exc_info:
            validate_request(payload)
        assert exc_info.value.errors

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidRequestError):
            validate_request(["Software Engineer"])


class TestParseModelOutput:
    def test_valid_completion(self, software_completion):
        raw = parse_model_output(software_completion)
        assert isinstance(raw, RawCareerPath)
        assert len(raw.stages) == 5
        assert raw.target_role == "Software Engineer"
        assert raw.stages[0].years_experience == "0-2 years"

    def test_code_fences_are_stripped(self, software_completion):
        fenced = f"```json\n{software_completion}\n```"
        assert len(parse_model_output(fenced).stages) == 5

    def test_camel_case_and_legacy_keys(self):
        text = json.dumps({
            "targetRole": "Designer",
            "nodes": [{
                "title": "UX Designer",
                "yearsExperience": "2-4 years",
                "salaryRange": "$70k-$90k",
                "skills": [{"name": "Figma", "level": "advanced"}, "Research"],
                "certifications": [{"name": "Google UX", "url": "https://grow.google.com/ux"}],
            }],
        })
        raw = parse_model_output(text)
        stage = raw.stages[0]
        assert raw.target_role == "Designer"
        assert stage.years_experience == "2-4 years"
        assert stage.salary == "$70k-$90k"
        assert isinstance(stage.keywords[0], RawSkill)
        assert stage.keywords[1] == "Research"
        assert isinstance(stage.certifications[0], RawCertification)

    def test_paths_wrapper_uses_first_path(self, software_path):
        text = json.dumps({"paths": [software_path, {"stages": [{"title": "Other"}]}]})
        assert len(parse_model_output(text).stages) == 5

    def test_empty_paths_wrapper_is_malformed(self):
        with pytest.raises(MalformedOutputError, match="no paths"):
            parse_model_output('{"paths": []}')

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "Sure! Here is your path.",
        '{"stages": [',
        "[]",
        '{"stages": []}',
        '{"stages": [{"description": "missing title"}]}',
        '{"stages": [{"title": ["not", "a", "string"]}]}',
    ])
    def test_malformed_completions(self, text):
        with pytest.raises(MalformedOutputError):
            parse_model_output(text)

    def test_oversized_completion(self, software_completion):
        policy = PipelinePolicy(max_completion_chars=100)
        with pytest.raises(MalformedOutputError, match="max 100"):
            parse_model_output(software_completion, policy)


def test_strip_code_fences_leaves_plain_text():
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
