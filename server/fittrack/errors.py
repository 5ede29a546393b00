"""
Error types shared by the calculators, the AI passthrough and the HTTP layer.
"""

from typing import Any, Dict


class ValidationError(ValueError):
    """Missing or invalid field on a calculator input."""

    kind = "ValidationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AIProviderError(RuntimeError):
    """The hosted LLM could not produce a usable answer."""


class FoodApiError(RuntimeError):
    """The food database could not be reached or rejected the request."""


class ExerciseApiError(RuntimeError):
    """ExerciseDB could not be reached or returned an unexpected payload."""


def tagged_error(exc: ValidationError) -> Dict[str, Any]:
    return {"ok": False, "kind": exc.kind, "message": exc.message}
