"""
services/repository.py

Question repository: where assessments are loaded from.
Public API:
  - AssessmentRepository                : protocol the HTTP layer depends on
  - InMemoryAssessmentRepository        : dict-backed implementation
  - load_assessments_file(path) -> list : JSON file loader (pydantic validated)

Load failures surface here, before any session is constructed.
"""

import json
import logging
from typing import Dict, Iterable, List, Protocol

from pydantic import TypeAdapter, ValidationError

from assessment_take.models.question_model import Assessment

logger = logging.getLogger(__name__)

_ASSESSMENT_LIST = TypeAdapter(List[Assessment])


class AssessmentNotFound(KeyError):
    def __init__(self, assessment_id: str):
        super().__init__(assessment_id)
        self.assessment_id = assessment_id

    def __str__(self) -> str:
        return f"assessment not found: {self.assessment_id!r}"


class AssessmentRepository(Protocol):
    def load_assessment(self, assessment_id: str) -> Assessment:
        ...

    def list_assessments(self) -> List[Assessment]:
        ...


class InMemoryAssessmentRepository:
    """Keeps assessments in insertion order; later duplicates replace earlier ones."""

    def __init__(self, assessments: Iterable[Assessment] = ()):
        self._items: Dict[str, Assessment] = {}
        for a in assessments:
            self.add(a)

    def add(self, assessment: Assessment) -> None:
        if assessment.id in self._items:
            logger.warning(f"Assessment {assessment.id} replaced in repository")
        self._items[assessment.id] = assessment

    def load_assessment(self, assessment_id: str) -> Assessment:
        try:
            return self._items[assessment_id]
        except KeyError:
            raise AssessmentNotFound(assessment_id) from None

    def list_assessments(self) -> List[Assessment]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


def load_assessments_file(path: str) -> List[Assessment]:
    """
    Read assessments from a JSON file.

    Accepted shapes: ``{"assessments": [...]}`` or a bare list.

    Raises:
        ValueError: unreadable JSON or an entry failing validation.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON ({e})") from e

    if isinstance(raw, dict):
        raw = raw.get("assessments", [])
    try:
        assessments = _ASSESSMENT_LIST.validate_python(raw)
    except ValidationError as e:
        raise ValueError(f"{path}: invalid assessment data\n{e}") from e

    logger.info(f"{len(assessments)} assessment(s) loaded from {path}")
    return assessments
