"""
errors.py

Domain errors of the assessment taking session.
All of them are caller-contract violations: raised immediately, never retried.
"""


class AssessmentError(Exception):
    """Base class for every error raised by the taking session."""


class InvalidAssessment(AssessmentError, ValueError):
    """The assessment cannot be taken (no questions, bad duration, duplicate ids)."""


class UnknownQuestion(AssessmentError, KeyError):
    """An answer referenced a question id absent from the session snapshot."""

    def __init__(self, question_id: str):
        super().__init__(question_id)
        self.question_id = question_id

    def __str__(self) -> str:
        return f"unknown question id: {self.question_id!r}"


class SessionClosed(AssessmentError, RuntimeError):
    """A mutating call reached a session that was already submitted."""
