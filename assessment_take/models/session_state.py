"""
models/session_state.py

Timed assessment session (state machine) and its state record.
No UI code, no IO: the caller drives the clock through tick() and forwards
the returned Result to a submission sink.

    in_progress --submit(now)------------> submitted
    in_progress --tick() reaches 0 ------> submitted (timed_out)
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from assessment_take.errors import InvalidAssessment, SessionClosed, UnknownQuestion
from assessment_take.models.question_model import Assessment
from assessment_take.models.result_model import Answer, Result

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


class ExamState(BaseModel):
    """
    Mutable state of one taking session.

    Attributes:
        current_index:     index of the question on screen (0-based).
        answers:           answer sheet. {question.id: value}, question order,
                           pre-filled with "" for every question.
        status:            in_progress or submitted.
        started_at:        start timestamp (Unix, time.time() base).
        remaining_seconds: countdown, never below 0.
    """

    current_index: int = Field(default=0, ge=0)
    answers: Dict[str, str] = Field(default_factory=dict)
    status: SessionStatus = SessionStatus.IN_PROGRESS
    started_at: float
    remaining_seconds: float = Field(..., ge=0)


class AssessmentSession:
    """
    Single-owner run of a taker through an assessment.

    Not thread-safe: one caller owns a session for its whole lifetime.
    Abandoning is just dropping the reference; no Result is produced.
    """

    def __init__(
        self,
        assessment: Assessment,
        now: float,
        student_id: Optional[str] = None,
    ):
        if not assessment.questions:
            raise InvalidAssessment(f"assessment {assessment.id!r} has no questions")
        if assessment.duration_minutes <= 0:
            raise InvalidAssessment(
                f"assessment {assessment.id!r} has a non-positive duration "
                f"({assessment.duration_minutes} min)"
            )
        ids = assessment.question_ids()
        if len(set(ids)) != len(ids):
            raise InvalidAssessment(f"assessment {assessment.id!r} has duplicate question ids")

        points = assessment.points_sum()
        if assessment.total_points and points != assessment.total_points:
            # not enforced, grading decides
            logger.warning(
                f"Assessment {assessment.id}: question points sum to {points}, "
                f"total_points is {assessment.total_points}"
            )

        self._assessment = assessment.model_copy(deep=True)
        self._duration = float(assessment.duration_minutes * 60)
        self.student_id = student_id
        self.state = ExamState(
            answers={qid: "" for qid in ids},
            started_at=now,
            remaining_seconds=self._duration,
        )
        self._result: Optional[Result] = None
        logger.info(f"Session started: assessment={assessment.id} questions={len(ids)}")

    # ── read accessors ───────────────────────────────────────────────────────

    @property
    def assessment(self) -> Assessment:
        return self._assessment

    @property
    def status(self) -> SessionStatus:
        return self.state.status

    @property
    def is_submitted(self) -> bool:
        return self.state.status is SessionStatus.SUBMITTED

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def question_count(self) -> int:
        return len(self._assessment.questions)

    @property
    def current_question(self):
        return self._assessment.questions[self.state.current_index]

    @property
    def remaining_seconds(self) -> float:
        return self.state.remaining_seconds

    @property
    def started_at(self) -> float:
        return self.state.started_at

    @property
    def answers(self) -> Dict[str, str]:
        return dict(self.state.answers)

    @property
    def answered_count(self) -> int:
        return sum(1 for v in self.state.answers.values() if v)

    @property
    def result(self) -> Optional[Result]:
        return self._result

    def answer_for(self, question_id: str) -> str:
        if question_id not in self.state.answers:
            raise UnknownQuestion(question_id)
        return self.state.answers[question_id]

    def unanswered_ids(self) -> List[str]:
        return [qid for qid, v in self.state.answers.items() if not v]

    # ── mutations ────────────────────────────────────────────────────────────

    def _ensure_open(self) -> None:
        if self.is_submitted:
            raise SessionClosed(f"assessment {self._assessment.id!r} was already submitted")

    def record_answer(self, question_id: str, value: str) -> None:
        """Overwrite the answer of one question. Same value twice is a no-op."""
        self._ensure_open()
        if question_id not in self.state.answers:
            raise UnknownQuestion(question_id)
        self.state.answers[question_id] = value

    def go_to(self, index: int) -> int:
        """Jump to a question, clamped to the valid range."""
        self._ensure_open()
        self.state.current_index = max(0, min(index, self.question_count - 1))
        return self.state.current_index

    def go_to_next(self) -> int:
        return self.go_to(self.state.current_index + 1)

    def go_to_previous(self) -> int:
        return self.go_to(self.state.current_index - 1)

    def tick(self, elapsed_seconds: float) -> Optional[Result]:
        """
        Consume elapsed time from the countdown.

        Returns:
            The Result when this tick exhausted the time (auto-submit),
            otherwise None. Ticking a submitted session does nothing.
        """
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed time cannot be negative: {elapsed_seconds}")
        if self.is_submitted:
            return None

        self.state.remaining_seconds = max(0.0, self.state.remaining_seconds - elapsed_seconds)
        if self.state.remaining_seconds > 0:
            return None

        logger.info(f"Time expired: assessment={self._assessment.id}, auto-submitting")
        return self._finalize(self.state.started_at + self._duration, timed_out=True)

    def submit(self, now: float) -> Result:
        """Finalize the session and return its Result."""
        self._ensure_open()
        return self._finalize(now, timed_out=False)

    def _finalize(self, ended_at: float, timed_out: bool) -> Result:
        self.state.status = SessionStatus.SUBMITTED
        self._result = Result(
            assessment_id=self._assessment.id,
            student_id=self.student_id,
            started_at=self.state.started_at,
            ended_at=ended_at,
            elapsed_seconds=max(0.0, ended_at - self.state.started_at),
            answers=tuple(
                Answer(question_id=qid, value=value)
                for qid, value in self.state.answers.items()
            ),
            timed_out=timed_out,
        )
        logger.info(
            f"Session submitted: assessment={self._assessment.id} "
            f"answered={self.answered_count}/{self.question_count} timed_out={timed_out}"
        )
        return self._result
