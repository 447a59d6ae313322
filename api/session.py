"""
api/session.py: per-client exam state, keyed by the session cookie

Each browser gets its own ClientState. Entries expire after SESSION_TTL
seconds without access and are swept by the app's cleanup thread.
"""

import threading
import time
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict

from config import SESSION_TTL
from assessment_take.models.result_model import Result
from assessment_take.models.session_state import AssessmentSession


class ClientState(BaseModel):
    """
    Attributes:
        exam:             the taking session, None before start / after reset.
        clock_mark:       wall-clock time of the last countdown tick.
        last_result:      Result of the last finished exam.
        pending_delivery: last_result has not reached the sink yet.
        touched_at:       last access, for expiry.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    exam: Optional[AssessmentSession] = None
    clock_mark: float = 0.0
    last_result: Optional[Result] = None
    pending_delivery: bool = False
    touched_at: float = 0.0

    def expired(self, now: float) -> bool:
        return now - self.touched_at > SESSION_TTL


_lock = threading.Lock()
_clients: dict[str, ClientState] = {}


def create_session() -> str:
    sid = uuid.uuid4().hex
    with _lock:
        _clients[sid] = ClientState(touched_at=time.time())
    return sid


def get_session(sid: str) -> ClientState | None:
    """State of a client; None when unknown or expired. Access refreshes the TTL."""
    now = time.time()
    with _lock:
        state = _clients.get(sid)
        if state is None:
            return None
        if state.expired(now):
            del _clients[sid]
            return None
        state.touched_at = now
        return state


def reset(sid: str) -> None:
    """Abandon the client's exam. An undelivered Result is kept for retry."""
    with _lock:
        state = _clients.get(sid)
        if state is None:
            return
        state.exam = None
        state.clock_mark = 0.0
        if not state.pending_delivery:
            state.last_result = None
        state.touched_at = time.time()


def cleanup_expired() -> int:
    now = time.time()
    with _lock:
        expired = [sid for sid, state in _clients.items() if state.expired(now)]
        for sid in expired:
            del _clients[sid]
    return len(expired)


def clear() -> None:
    with _lock:
        _clients.clear()
