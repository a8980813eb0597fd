"""Exception hierarchy for career tasks.

Every error carries a ``user_message`` that the presentation layer can show
as-is. Top-level task errors are caught by ``CareerSession.submit``;
refinement errors are caught by ``SectionRefiner``.
"""

from __future__ import annotations

RETRY_MESSAGE = "The AI response could not be understood. Please try again."


class CareerTaskError(Exception):
    """Base class for every expected failure of a career task."""

    user_message: str = "AI analysis failed. Please try again."

    def __init__(self, message: str = "", *, user_message: str | None = None):
        super().__init__(message or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class InputValidationError(CareerTaskError):
    """A required input field was empty at submission time."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"Required field is empty: {field_name}",
            user_message=f"Please fill in the {field_name.replace('_', ' ')}.",
        )


class TransportError(CareerTaskError):
    """The reasoning or search service call failed outright."""

    def __init__(self, message: str):
        super().__init__(message, user_message=message)


class MalformedResponse(CareerTaskError, ValueError):
    """The service replied with a payload that is not valid JSON."""

    user_message = RETRY_MESSAGE


class SchemaViolation(CareerTaskError):
    """The payload parsed but does not satisfy the response contract."""

    user_message = RETRY_MESSAGE


class EmptyGeneration(CareerTaskError):
    """A Generate reply parsed fine but contained no CV sections."""

    user_message = (
        "AI failed to generate CV sections. Please try with a more specific goal."
    )


class ExtractionError(CareerTaskError):
    """An uploaded file could not be turned into text."""

    user_message = "Failed to extract text from the file. Please paste the text manually."


class RefinementError(CareerTaskError):
    """A section refinement call failed."""

    user_message = "Refinement failed. The section was left unchanged."


class TaskInFlightError(CareerTaskError):
    """A new task was submitted while another was still running."""

    user_message = "A request is already in progress."


class ConfigError(CareerTaskError, ValueError):
    """Missing credentials or an invalid configuration value."""
