import json

import pytest
from pydantic import ValidationError

from assessment_take.models.session_state import AssessmentSession
from assessment_take.services.submission import (
    InMemorySubmissionSink,
    decode_result,
    encode_result,
)

from conftest import T0


@pytest.fixture
def result(assessment):
    s = AssessmentSession(assessment, T0, student_id="student-4")
    s.record_answer("Q1", "B")
    s.record_answer("Q2", "my answer")
    return s.submit(T0 + 30)


def test_encoded_result_is_json(result):
    payload = encode_result(result)
    text = json.dumps(payload)
    assert json.loads(text)["answers"] == [
        {"question_id": "Q1", "value": "B"},
        {"question_id": "Q2", "value": "my answer"},
    ]


def test_decode_restores_answer_map(result):
    decoded = decode_result(json.loads(json.dumps(encode_result(result))))
    assert decoded.answer_map() == {"Q1": "B", "Q2": "my answer"}
    assert decoded == result


def test_decode_rejects_bad_payload():
    with pytest.raises(ValidationError):
        decode_result({"assessment_id": "a1"})


class TestInMemorySink:
    def test_stores_by_result_id(self, result):
        sink = InMemorySubmissionSink()
        sink.submit_result(result)
        assert len(sink) == 1
        assert sink.get(result.id).answer_map() == result.answer_map()

    def test_same_result_twice_kept_once(self, result):
        sink = InMemorySubmissionSink()
        sink.submit_result(result)
        sink.submit_result(result)
        assert len(sink) == 1

    def test_results_for_assessment(self, result, assessment):
        sink = InMemorySubmissionSink()
        sink.submit_result(result)
        other = AssessmentSession(assessment.model_copy(update={"id": "other"}), T0).submit(T0 + 1)
        sink.submit_result(other)
        assert [r.id for r in sink.results_for("a1")] == [result.id]

    def test_unknown_result_id(self):
        with pytest.raises(KeyError):
            InMemorySubmissionSink().get("missing")
