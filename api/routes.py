"""
api/routes.py: FastAPI endpoints
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

import config
import api.session as session

from assessment_take.errors import InvalidAssessment, SessionClosed, UnknownQuestion
from assessment_take.models.actor import Actor
from assessment_take.models.result_model import Result
from assessment_take.models.session_state import AssessmentSession
from assessment_take.services.exam_service import (
    check_answer_value,
    format_time,
    is_time_warning,
    points_mismatch,
    progress,
    question_view,
    question_views,
)
from assessment_take.services.pagination import paginate
from assessment_take.services.repository import AssessmentNotFound
from assessment_take.services.submission import encode_result

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Pydantic request bodies ──────────────────────────────────────────────────

class StartAssessmentBody(BaseModel):
    assessment_id: str

class SaveAnswerBody(BaseModel):
    question_id: str
    answer: str = ""

class NavigateBody(BaseModel):
    index: int = 0


# ── helpers ──────────────────────────────────────────────────────────────────

def _client(request: Request) -> session.ClientState:
    state = session.get_session(request.state.session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Client session expired.")
    return state


def _require_actor(request: Request) -> Actor:
    actor: Actor | None = request.state.actor
    if actor is None:
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid X-Actor-Id / X-Actor-Name / X-Actor-Role headers.",
        )
    return actor


def _deliver(client: session.ClientState, request: Request, result: Result) -> None:
    """
    Forward a Result to the submission sink.

    Until the sink accepts it the Result stays pending and every later
    exam request tries again.
    """
    client.last_result = result
    client.pending_delivery = True
    try:
        request.app.state.sink.submit_result(result)
    except Exception as e:
        logger.error(f"Result {result.id} delivery failed: {e}")
        raise HTTPException(status_code=502, detail="Result could not be delivered.") from e
    client.pending_delivery = False


def _retry_pending(client: session.ClientState, request: Request) -> None:
    if client.pending_delivery and client.last_result is not None:
        logger.info(f"Retrying delivery of result {client.last_result.id}")
        _deliver(client, request, client.last_result)


def _advance_clock(client: session.ClientState, request: Request) -> None:
    """Feed the wall-clock time since the last request into the countdown."""
    now = request.app.state.clock()
    elapsed = max(0.0, now - client.clock_mark)
    client.clock_mark = now
    result = client.exam.tick(elapsed)
    if result is not None:
        _deliver(client, request, result)


def _current_exam(request: Request) -> AssessmentSession:
    client = _client(request)
    _retry_pending(client, request)
    if client.exam is None:
        raise HTTPException(status_code=404, detail="No assessment in progress.")
    _advance_clock(client, request)
    return client.exam


def _closed(exam: AssessmentSession) -> HTTPException:
    result = exam.result
    if result is not None and result.timed_out:
        return HTTPException(status_code=409, detail="Time expired, your answers were submitted.")
    return HTTPException(status_code=409, detail="Assessment already submitted.")


def _state_payload(exam: AssessmentSession) -> dict:
    result = exam.result
    return {
        "assessment_id": exam.assessment.id,
        "title": exam.assessment.title,
        "status": exam.status.value,
        "timed_out": bool(result and result.timed_out),
        "current_index": exam.current_index,
        "total": exam.question_count,
        "remaining_seconds": exam.remaining_seconds,
        "time_left": format_time(exam.remaining_seconds),
        "time_warning": is_time_warning(exam.remaining_seconds, config.TIME_WARNING_SECONDS),
        "answers": exam.answers,
        "progress": progress(exam),
    }


def _summary(assessment) -> dict:
    return {
        "id": assessment.id,
        "title": assessment.title,
        "description": assessment.description,
        "duration_minutes": assessment.duration_minutes,
        "total_points": assessment.total_points,
        "question_count": len(assessment.questions),
        "points_mismatch": points_mismatch(assessment),
    }


# ── endpoints ────────────────────────────────────────────────────────────────

@router.get("/api/assessments")
async def list_assessments(request: Request, page: int = 1, page_size: int = config.DEFAULT_PAGE_SIZE):
    if page_size < 1:
        raise HTTPException(status_code=422, detail="page_size must be positive.")
    assessments = request.app.state.repository.list_assessments()
    return paginate([_summary(a) for a in assessments], page, page_size).model_dump()


@router.post("/api/start-assessment")
async def start_assessment(request: Request, body: StartAssessmentBody):
    actor = _require_actor(request)
    try:
        assessment = request.app.state.repository.load_assessment(body.assessment_id)
    except AssessmentNotFound:
        raise HTTPException(status_code=404, detail="Assessment not found.")

    now = request.app.state.clock()
    try:
        exam = AssessmentSession(assessment, now, student_id=actor.id)
    except InvalidAssessment as e:
        raise HTTPException(status_code=422, detail=str(e))

    client = _client(request)
    # a new exam must not overwrite an undelivered Result
    _retry_pending(client, request)
    previous = client.exam
    if previous is not None and not previous.is_submitted:
        sid = request.state.session_id
        logger.info(f"Abandoned unfinished assessment {previous.assessment.id} (client {sid[:8]})")

    client.exam = exam
    client.clock_mark = now
    client.last_result = None
    return {
        "ok": True,
        "total": exam.question_count,
        "duration_seconds": exam.remaining_seconds,
    }


@router.get("/api/exam-state")
async def get_exam_state(request: Request):
    return _state_payload(_current_exam(request))


@router.get("/api/questions")
async def list_questions(request: Request):
    """Question navigator: every question with its saved answer."""
    exam = _current_exam(request)
    return {"current_index": exam.current_index, "questions": question_views(exam)}


@router.get("/api/question/current")
async def get_current_question(request: Request):
    exam = _current_exam(request)
    q = exam.current_question
    d = question_view(q, exam.answer_for(q.id))
    d.update({"index": exam.current_index, "total": exam.question_count})
    return d


@router.get("/api/question/{index}")
async def get_question(request: Request, index: int):
    exam = _current_exam(request)
    questions = exam.assessment.questions
    if not (0 <= index < len(questions)):
        raise HTTPException(status_code=404, detail="Question not found.")
    q = questions[index]
    d = question_view(q, exam.answer_for(q.id))
    d.update({"index": index, "total": len(questions)})
    return d


@router.post("/api/save-answer")
async def save_answer(request: Request, body: SaveAnswerBody):
    exam = _current_exam(request)
    if exam.is_submitted:
        raise _closed(exam)

    question = next((q for q in exam.assessment.questions if q.id == body.question_id), None)
    if question is None:
        raise HTTPException(status_code=404, detail=str(UnknownQuestion(body.question_id)))
    try:
        check_answer_value(question, body.answer)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    exam.record_answer(body.question_id, body.answer)
    return {"ok": True, "answered_count": exam.answered_count}


@router.post("/api/next")
async def go_next(request: Request):
    exam = _current_exam(request)
    try:
        return {"ok": True, "index": exam.go_to_next()}
    except SessionClosed:
        raise _closed(exam)


@router.post("/api/previous")
async def go_previous(request: Request):
    exam = _current_exam(request)
    try:
        return {"ok": True, "index": exam.go_to_previous()}
    except SessionClosed:
        raise _closed(exam)


@router.post("/api/navigate")
async def navigate(request: Request, body: NavigateBody):
    exam = _current_exam(request)
    try:
        return {"ok": True, "index": exam.go_to(body.index)}
    except SessionClosed:
        raise _closed(exam)


@router.post("/api/submit-exam")
async def submit_exam(request: Request):
    exam = _current_exam(request)
    try:
        result = exam.submit(request.app.state.clock())
    except SessionClosed:
        raise _closed(exam)
    _deliver(_client(request), request, result)
    return {"ok": True, "result": encode_result(result)}


@router.get("/api/results")
async def get_results(request: Request):
    client = _client(request)
    _retry_pending(client, request)
    if client.exam is not None:
        _advance_clock(client, request)
        if not client.exam.is_submitted:
            raise HTTPException(status_code=400, detail="Assessment not submitted yet.")

    result = client.last_result
    if result is None:
        raise HTTPException(status_code=404, detail="No result available.")
    return {"result": encode_result(result), "timed_out": result.timed_out}


@router.post("/api/reset")
async def reset_session(request: Request):
    session.reset(request.state.session_id)
    return {"ok": True}
