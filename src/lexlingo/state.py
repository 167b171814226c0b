import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from .config import settings
from .models import ClientState, WordRecord

logger = logging.getLogger(__name__)


class ClientStateRegistry:
    """In-memory per-visitor state, keyed by the session cookie value."""

    def __init__(self, timeout_minutes: Optional[int] = None):
        self.timeout = timedelta(
            minutes=timeout_minutes or settings.SESSION_TIMEOUT_MINUTES
        )
        self.states: Dict[str, ClientState] = {}

    def _expired(self, state: ClientState, now: datetime) -> bool:
        return now - state.last_seen > self.timeout

    def get(self, session_id: Optional[str]) -> Optional[ClientState]:
        if not session_id or session_id not in self.states:
            return None
        state = self.states[session_id]
        now = datetime.now()
        if self._expired(state, now):
            del self.states[session_id]
            logger.info(f"Session expired: {session_id}")
            return None
        state.last_seen = now
        return state

    def sweep(self) -> int:
        """Drops every expired state; returns how many were removed."""
        now = datetime.now()
        expired = [sid for sid, s in self.states.items() if self._expired(s, now)]
        for sid in expired:
            del self.states[sid]
        if expired:
            logger.info(f"Dropped {len(expired)} expired sessions")
        return len(expired)

    def create(self) -> Tuple[str, ClientState]:
        self.sweep()
        new_id = str(uuid.uuid4())
        state = ClientState(target_language=settings.DEFAULT_TARGET_LANGUAGE)
        self.states[new_id] = state
        logger.info(f"New session: {new_id}")
        return new_id, state

    def discard(self, session_id: Optional[str]):
        self.states.pop(session_id, None)


def set_current_word(state: ClientState, record: WordRecord) -> ClientState:
    """The latest lookup to arrive wins; its translation starts out empty."""
    state.current_word = record
    state.current_translation = ""
    return state
