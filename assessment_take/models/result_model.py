"""
models/result_model.py

Answer and Result models.
A Result is emitted exactly once per session and never changes afterwards.
"""

import uuid
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Answer(BaseModel):
    """One answer per question. ``value == ""`` means not answered."""

    model_config = ConfigDict(frozen=True)

    question_id: str = Field(..., description="Answered question id")
    value: str = Field(default="", description="Option id, free text, or empty")


class Result(BaseModel):
    """
    Frozen output of a finished session.

    Attributes:
        assessment_id:   id of the taken assessment.
        student_id:      actor who took it (None when anonymous).
        started_at:      session start (Unix timestamp).
        ended_at:        submit time, or start + duration on timeout.
        elapsed_seconds: ended_at - started_at.
        answers:         value copies, in question order.
        timed_out:       True when finalized by the countdown.
        score:           always None here; grading is external.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    assessment_id: str
    student_id: Optional[str] = None
    started_at: float
    ended_at: float
    elapsed_seconds: float = Field(..., ge=0)
    answers: Tuple[Answer, ...] = ()
    timed_out: bool = False
    score: Optional[float] = None

    def answer_map(self) -> Dict[str, str]:
        return {a.question_id: a.value for a in self.answers}
