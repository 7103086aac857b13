"""In-memory listen session repository for testing."""

from typing import Optional

from listen.domain.model.session import ListenSession
from listen.domain.repository.session import SessionRepository
from listen.domain.value import SessionId, UserId


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of SessionRepository for testing."""

    def __init__(self) -> None:
        self._sessions: dict[SessionId, ListenSession] = {}

    async def find_by_id(self, session_id: SessionId) -> Optional[ListenSession]:
        """Find a session by ID."""
        return self._sessions.get(session_id)

    async def save(self, session: ListenSession) -> ListenSession:
        """Save or replace a session."""
        self._sessions[session.id] = session
        return session

    async def find_active_by_host(self, host_id: UserId) -> list[ListenSession]:
        """Find active sessions hosted by a user, newest first."""
        matches = [
            s for s in self._sessions.values() if s.is_active and s.host_id == host_id
        ]
        return sorted(matches, key=lambda s: s.created_at, reverse=True)

    async def find_active_by_participant(self, user_id: UserId) -> list[ListenSession]:
        """Find active sessions a user participates in, newest first."""
        matches = [
            s
            for s in self._sessions.values()
            if s.is_active and user_id in s.participant_ids
        ]
        return sorted(matches, key=lambda s: s.created_at, reverse=True)
