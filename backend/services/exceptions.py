"""Error types raised inside the career path pipeline."""


class CareerPathError(Exception):
    """Base class for pipeline errors."""


class StructuralValidationError(CareerPathError):
    """A value did not match the expected shape."""

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class InvalidRequestError(StructuralValidationError):
    """The caller's request is invalid. Reject it; never retry."""


class MalformedOutputError(StructuralValidationError):
    """The model's completion is not a well-formed career path. Retry."""


class CompletionError(CareerPathError):
    """The generative backend failed to return a completion."""


class CompletionTimeout(CompletionError):
    """The generative backend did not answer in time."""
