"""
services/submission.py

Submission sink: where finished Results are delivered.
Idempotency belongs to the sink; sessions already refuse a second submit.
"""

import logging
import threading
from typing import Any, Dict, List, Protocol

from assessment_take.models.result_model import Result

logger = logging.getLogger(__name__)


def encode_result(result: Result) -> Dict[str, Any]:
    """Result → JSON-compatible transport payload."""
    return result.model_dump(mode="json")


def decode_result(payload: Dict[str, Any]) -> Result:
    """Transport payload → Result. Raises pydantic.ValidationError on bad data."""
    return Result.model_validate(payload)


class SubmissionSink(Protocol):
    def submit_result(self, result: Result) -> None:
        ...


class InMemorySubmissionSink:
    """Stores encoded payloads by result id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._payloads: Dict[str, Dict[str, Any]] = {}

    def submit_result(self, result: Result) -> None:
        payload = encode_result(result)
        with self._lock:
            self._payloads[result.id] = payload
        logger.info(
            f"Result {result.id} stored: assessment={result.assessment_id} "
            f"student={result.student_id} timed_out={result.timed_out}"
        )

    def get(self, result_id: str) -> Result:
        with self._lock:
            payload = self._payloads[result_id]
        return decode_result(payload)

    def results_for(self, assessment_id: str) -> List[Result]:
        with self._lock:
            payloads = list(self._payloads.values())
        return [decode_result(p) for p in payloads if p["assessment_id"] == assessment_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._payloads)
