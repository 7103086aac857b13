"""Session store domain service."""

from datetime import datetime

import logfire

from listen.domain.error import NotFoundError
from listen.domain.model import ListenSession, PlaybackPatch
from listen.domain.repository import SessionRepository
from listen.domain.value import SessionId, UserId

from .base import Service


class SessionService(Service):
    """Domain service owning the canonical session record.

    Every change goes through an entity transition and is written back as a
    whole record.
    """

    def __init__(self, session_repository: SessionRepository) -> None:
        """Initialize session service.

        Args:
            session_repository: Session repository
        """
        self.session_repository = session_repository

    async def find_by_id(self, session_id: SessionId) -> ListenSession | None:
        """Find a session by ID, None if it does not exist."""
        return await self.session_repository.find_by_id(session_id)

    async def get_by_id(self, session_id: SessionId) -> ListenSession:
        """Get session by ID.

        Args:
            session_id: Session ID

        Returns:
            The session

        Raises:
            NotFoundError: If session not found
        """
        session = await self.session_repository.find_by_id(session_id)
        if not session:
            logfire.warn("Session not found", session_id=str(session_id))
            raise NotFoundError("Session", str(session_id))
        return session

    async def create_session(
        self, host_id: UserId, participant_id: UserId, now: datetime
    ) -> ListenSession:
        """Create and persist a fresh active session.

        Args:
            host_id: Host (inviter) ID
            participant_id: Participant (invitee) ID
            now: Creation time

        Returns:
            The saved session
        """
        session = ListenSession.start(host_id, participant_id, now)
        saved = await self.session_repository.save(session)
        logfire.info(
            "Session created",
            session_id=str(saved.id),
            host_id=str(host_id),
            participant_id=str(participant_id),
        )
        return saved

    async def end_session(self, session: ListenSession, now: datetime) -> ListenSession:
        """Deactivate a session and stamp ``ended_at``.

        Args:
            session: Session to end
            now: End time (ignored if the session already ended)

        Returns:
            The ended session
        """
        if not session.is_active:
            return session
        ended = await self.session_repository.save(session.end(now))
        logfire.info("Session ended", session_id=str(session.id))
        return ended

    async def remove_participant(
        self, session: ListenSession, user_id: UserId, now: datetime
    ) -> ListenSession:
        """Remove a participant, ending the session when the rules require it.

        Args:
            session: Session to update
            user_id: Departing user
            now: Time of departure

        Returns:
            The updated session
        """
        updated = await self.session_repository.save(
            session.remove_participant(user_id, now)
        )
        logfire.info(
            "Participant removed",
            session_id=str(session.id),
            user_id=str(user_id),
            remaining=len(updated.participant_ids),
            session_ended=session.is_active and not updated.is_active,
        )
        return updated

    async def apply_playback(
        self, session: ListenSession, patch: PlaybackPatch, now: datetime
    ) -> ListenSession:
        """Apply a partial playback update and persist it.

        Args:
            session: Active session to update
            patch: Fields to change
            now: Update time, stamped on the playback state

        Returns:
            The updated session

        Raises:
            InvalidStateError: If the session is no longer active
        """
        updated = session.apply_playback(patch, now)
        return await self.session_repository.save(updated)
