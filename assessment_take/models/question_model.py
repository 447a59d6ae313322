"""
models/question_model.py

Assessment / question models.
Pydantic v2, questions are a tagged union discriminated by ``type``.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field, field_validator

MULTIPLE_CHOICE = "multiple_choice"
ESSAY = "essay"
PRACTICAL = "practical"


class Option(BaseModel):
    """
    A multiple-choice option.

    ``is_correct`` is excluded from every serialization so taker-facing
    payloads cannot leak it.
    """
    id: str = Field(..., min_length=1, description="Option id (unique within its question)")
    text: str = Field(..., description="Option text")
    is_correct: bool = Field(
        default=False,
        exclude=True,
        repr=False,
        description="Correctness flag, only for the external grader",
    )


class _QuestionBase(BaseModel):
    id: str = Field(..., min_length=1, description="Question id (unique within the assessment)")
    text: str = Field(..., min_length=1, description="Question statement")
    points: float = Field(default=0.0, ge=0, description="Point value")


class MultipleChoiceQuestion(_QuestionBase):
    type: Literal["multiple_choice"] = MULTIPLE_CHOICE
    options: List[Option] = Field(..., description="Ordered options")

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: List[Option]) -> List[Option]:
        """At least two options, with unique ids."""
        if len(v) < 2:
            raise ValueError("a multiple choice question needs at least 2 options")
        ids = [o.id for o in v]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate option ids: {ids}")
        return v

    def option_ids(self) -> List[str]:
        return [o.id for o in self.options]


class EssayQuestion(_QuestionBase):
    type: Literal["essay"] = ESSAY


class PracticalQuestion(_QuestionBase):
    """Handled out-of-band by a human evaluator; no response is collected."""
    type: Literal["practical"] = PRACTICAL


Question = Annotated[
    Union[MultipleChoiceQuestion, EssayQuestion, PracticalQuestion],
    Field(discriminator="type"),
]

TYPE_LABELS = {
    MULTIPLE_CHOICE: "Multiple choice",
    ESSAY: "Essay",
    PRACTICAL: "Practical",
}


def type_label(question) -> str:
    """Display label of a question variant."""
    if isinstance(question, MultipleChoiceQuestion):
        return TYPE_LABELS[MULTIPLE_CHOICE]
    if isinstance(question, EssayQuestion):
        return TYPE_LABELS[ESSAY]
    if isinstance(question, PracticalQuestion):
        return TYPE_LABELS[PRACTICAL]
    raise TypeError(f"unsupported question variant: {type(question).__name__}")


class Assessment(BaseModel):
    """
    A timed exam: ordered questions, duration (minutes) and point budget.

    Drafts are allowed here (no questions, zero duration);
    taking preconditions are checked by AssessmentSession.
    """
    id: str = Field(..., min_length=1, description="Assessment id")
    title: str = Field(..., description="Title")
    description: str = Field(default="", description="Description")
    duration_minutes: int = Field(..., description="Allotted time in minutes")
    total_points: float = Field(default=0.0, ge=0, description="Point budget")
    questions: List[Question] = Field(default_factory=list, description="Ordered questions")

    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]

    def points_sum(self) -> float:
        return sum(q.points for q in self.questions)
