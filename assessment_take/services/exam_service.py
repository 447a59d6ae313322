"""
services/exam_service.py

Pure helpers around a taking session: countdown label, answer validation,
progress summary, taker-facing question views.
No UI code, no global state changes.
"""

from typing import Dict, List

from assessment_take.models.question_model import (
    Assessment,
    EssayQuestion,
    MultipleChoiceQuestion,
    PracticalQuestion,
    type_label,
)
from assessment_take.models.session_state import AssessmentSession

DEFAULT_WARNING_SECONDS = 600  # 10 minutes


def format_time(seconds: float) -> str:
    """
    Countdown label, ``M:SS``.

    >>> format_time(125)
    '2:05'
    """
    total = max(0, int(seconds))
    minutes, remaining = divmod(total, 60)
    return f"{minutes}:{remaining:02d}"


def is_time_warning(remaining: float, threshold: float = DEFAULT_WARNING_SECONDS) -> bool:
    """True once the remaining time drops under the warning threshold."""
    return remaining < threshold


def check_answer_value(question, value: str) -> None:
    """
    Validate an answer before it is recorded.

    - multiple_choice: "" (clear) or one of the option ids.
    - essay:           any text.
    - practical:       only "" (nothing is collected).

    Raises:
        ValueError: the value does not fit the question variant.
    """
    if isinstance(question, MultipleChoiceQuestion):
        if value and value not in question.option_ids():
            raise ValueError(
                f"option {value!r} does not belong to question {question.id!r}"
            )
    elif isinstance(question, EssayQuestion):
        return
    elif isinstance(question, PracticalQuestion):
        if value:
            raise ValueError(f"practical question {question.id!r} takes no answer")
    else:
        raise TypeError(f"unsupported question variant: {type(question).__name__}")


def points_mismatch(assessment: Assessment) -> float:
    """
    Question point sum minus the assessment's point budget.

    0.0 means consistent. Nothing enforces this; it is reported only.
    """
    return assessment.points_sum() - assessment.total_points


def progress(session: AssessmentSession) -> Dict[str, object]:
    """
    Progress summary of a session.

    Returns:
        {"answered": int, "unanswered": int, "unanswered_ids": [str],
         "total": int, "percent": float, "position": "3 / 10"}
    """
    total = session.question_count
    answered = session.answered_count
    return {
        "answered": answered,
        "unanswered": total - answered,
        "unanswered_ids": session.unanswered_ids(),
        "total": total,
        "percent": round(answered / total * 100, 1) if total else 0.0,
        "position": f"{session.current_index + 1} / {total}",
    }


def question_view(question, saved_answer: str = "") -> Dict[str, object]:
    """Taker-facing mapping of a question; option correctness never included."""
    view = question.model_dump()
    view["type_label"] = type_label(question)
    view["saved_answer"] = saved_answer
    return view


def question_views(session: AssessmentSession) -> List[Dict[str, object]]:
    answers = session.answers
    return [question_view(q, answers[q.id]) for q in session.assessment.questions]
