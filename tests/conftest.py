import pytest
from fastapi.testclient import TestClient

import api.session as client_sessions
from api.app import create_app
from assessment_take.models.question_model import (
    Assessment,
    EssayQuestion,
    MultipleChoiceQuestion,
    Option,
    PracticalQuestion,
)
from assessment_take.services.repository import InMemoryAssessmentRepository
from assessment_take.services.submission import InMemorySubmissionSink

T0 = 1_700_000_000.0

STUDENT_HEADERS = {
    "X-Actor-Id": "student-4",
    "X-Actor-Name": "Ana Souza",
    "X-Actor-Role": "student",
}


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = T0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_two_question_assessment(**overrides) -> Assessment:
    """Q1 multiple choice {A, B, C}, Q2 essay, one minute."""
    data = dict(
        id="a1",
        title="Two questions",
        duration_minutes=1,
        total_points=20,
        questions=[
            MultipleChoiceQuestion(
                id="Q1",
                text="Pick one",
                points=10,
                options=[
                    Option(id="A", text="first"),
                    Option(id="B", text="second", is_correct=True),
                    Option(id="C", text="third"),
                ],
            ),
            EssayQuestion(id="Q2", text="Explain", points=10),
        ],
    )
    data.update(overrides)
    return Assessment(**data)


@pytest.fixture
def assessment() -> Assessment:
    return make_two_question_assessment()


@pytest.fixture
def practical_assessment() -> Assessment:
    return make_two_question_assessment(
        id="a2",
        total_points=25,
        questions=[
            EssayQuestion(id="E1", text="Explain", points=10),
            PracticalQuestion(id="P1", text="Demonstrate", points=15),
        ],
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> InMemorySubmissionSink:
    return InMemorySubmissionSink()


@pytest.fixture
def repository(assessment, practical_assessment) -> InMemoryAssessmentRepository:
    draft = make_two_question_assessment(id="draft", questions=[])
    return InMemoryAssessmentRepository([assessment, practical_assessment, draft])


@pytest.fixture
def client(repository, sink, clock):
    client_sessions.clear()
    app = create_app(repository=repository, sink=sink, clock=clock, start_cleanup=False)
    with TestClient(app, headers=STUDENT_HEADERS) as c:
        yield c
    client_sessions.clear()
