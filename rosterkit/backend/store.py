"""In-memory session store."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from typing import Any, Callable, Protocol
import uuid

from .grouping import DEFAULT_GROUP_SIZE
from .models import CreatedSession
from .reveal import SpinTiming
from .session import Session

logger = logging.getLogger(__name__)

StatePublisher = Callable[[str, dict[str, Any]], None]
TickPublisher = Callable[[str, int, str], None]


class SessionStore(Protocol):
    publish_state: StatePublisher | None
    publish_tick: TickPublisher | None

    def create_session(self, name: str) -> CreatedSession:
        """Create a session with an empty roster and no history."""

    def get_session(self, session_id: str) -> Session | None:
        """Return the live session when it exists."""

    def get_session_state(self, session_id: str) -> dict[str, Any] | None:
        """Return the session snapshot when it exists."""

    def apply_action(self, session_id: str, action: dict[str, Any]) -> dict[str, Any] | None:
        """Apply a roster action and return the new snapshot."""

    def close_session(self, session_id: str) -> bool:
        """Cancel pending work and forget the session."""

    def close_all(self) -> None:
        """Close every open session."""


@dataclass
class InMemorySessionStore:
    default_group_size: int = DEFAULT_GROUP_SIZE
    spin_timing: SpinTiming = field(default_factory=SpinTiming)
    rng: random.Random | None = None
    publish_state: StatePublisher | None = None
    publish_tick: TickPublisher | None = None

    def __post_init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def create_session(self, name: str) -> CreatedSession:
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = Session(
            session_id,
            name,
            group_size=self.default_group_size,
            timing=self.spin_timing,
            rng=self.rng,
            on_change=self._session_changed,
            on_tick=self._session_ticked,
        )
        logger.info("Session %s created (%s)", session_id, name)
        return CreatedSession(session_id=session_id)

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def get_session_state(self, session_id: str) -> dict[str, Any] | None:
        session = self.get_session(session_id)
        if session is None:
            return None
        return session.to_state()

    def apply_action(self, session_id: str, action: dict[str, Any]) -> dict[str, Any] | None:
        session = self.get_session(session_id)
        if session is None:
            return None
        return session.apply_action(action)

    def close_session(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close_session(session_id)

    def _session_changed(self, session: Session) -> None:
        if self.publish_state is not None:
            self.publish_state(session.session_id, session.to_state())

    def _session_ticked(self, session: Session, tick: int, display: str) -> None:
        if self.publish_tick is not None:
            self.publish_tick(session.session_id, tick, display)
