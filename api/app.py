"""
api/app.py: FastAPI app instance + client session / actor middleware
"""

import logging
import threading
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from config import ASSESSMENTS_FILE, CLEANUP_INTERVAL, SESSION_COOKIE, SESSION_TTL
from api.routes import router
from api.sample_assessment import SAMPLE_ASSESSMENTS
import api.session as session
from assessment_take.models.actor import Actor
from assessment_take.services.repository import (
    AssessmentRepository,
    InMemoryAssessmentRepository,
    load_assessments_file,
)
from assessment_take.services.submission import InMemorySubmissionSink, SubmissionSink

logger = logging.getLogger(__name__)


def _read_actor(request: Request) -> Actor | None:
    """Current actor from the X-Actor-* headers; None when absent or malformed."""
    actor_id = request.headers.get("x-actor-id")
    if not actor_id:
        return None
    try:
        return Actor(
            id=actor_id,
            name=request.headers.get("x-actor-name", ""),
            role=request.headers.get("x-actor-role", "student"),
        )
    except ValidationError:
        logger.warning(f"Rejected malformed actor headers for id={actor_id}")
        return None


def _default_repository() -> AssessmentRepository:
    if ASSESSMENTS_FILE:
        return InMemoryAssessmentRepository(load_assessments_file(ASSESSMENTS_FILE))
    return InMemoryAssessmentRepository(SAMPLE_ASSESSMENTS)


def create_app(
    repository: AssessmentRepository | None = None,
    sink: SubmissionSink | None = None,
    clock: Callable[[], float] = time.time,
    start_cleanup: bool = True,
) -> FastAPI:
    app = FastAPI(title="Assessment Take", docs_url=None, redoc_url=None)
    app.state.repository = repository if repository is not None else _default_repository()
    app.state.sink = sink if sink is not None else InMemorySubmissionSink()
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Client session middleware: session id from the cookie, issued when missing
    @app.middleware("http")
    async def session_middleware(request: Request, call_next):
        sid = request.cookies.get(SESSION_COOKIE)
        if not sid or session.get_session(sid) is None:
            sid = session.create_session()

        request.state.session_id = sid
        request.state.actor = _read_actor(request)
        response: Response = await call_next(request)
        response.set_cookie(
            key=SESSION_COOKIE,
            value=sid,
            httponly=True,
            samesite="lax",
            max_age=SESSION_TTL,
        )
        return response

    app.include_router(router)

    # Periodic sweep of expired client sessions
    def _cleanup_loop():
        while True:
            time.sleep(CLEANUP_INTERVAL)
            removed = session.cleanup_expired()
            if removed:
                logger.info(f"{removed} expired client session(s) removed")

    if start_cleanup:
        t = threading.Thread(target=_cleanup_loop, daemon=True)
        t.start()

    return app
