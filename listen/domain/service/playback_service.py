"""Playback sync domain service."""

import logfire

from listen.domain.error import ForbiddenError, InvalidStateError
from listen.domain.model import ListenSession, PlaybackPatch
from listen.domain.model.common import utcnow
from listen.domain.value import SessionId, UserId

from .base import Service
from .session_service import SessionService


class PlaybackSyncService(Service):
    """Single-writer gateway for session playback state.

    Only the host may change the transport state; participants poll it.
    """

    def __init__(self, session_service: SessionService) -> None:
        """Initialize playback sync service.

        Args:
            session_service: Session store service
        """
        self.session_service = session_service

    async def update_playback(
        self, session_id: SessionId, user_id: UserId, patch: PlaybackPatch
    ) -> ListenSession:
        """Apply a host's partial playback update.

        Args:
            session_id: Session ID
            user_id: Caller, who must be the host
            patch: Fields to change

        Returns:
            The updated session

        Raises:
            NotFoundError: If session not found
            InvalidStateError: If the session is no longer active
            ForbiddenError: If the caller is not the host
        """
        with logfire.span(
            "playback_service.update_playback",
            session_id=str(session_id),
            user_id=str(user_id),
            fields=sorted(patch.model_fields_set),
        ):
            session = await self.session_service.get_by_id(session_id)
            if not session.is_active:
                raise InvalidStateError("Session is no longer active")
            if not session.is_host(user_id):
                logfire.warn(
                    "Non-host attempted playback update",
                    session_id=str(session_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError("Only the host can update playback state")

            updated = await self.session_service.apply_playback(
                session, patch, utcnow()
            )
            logfire.info(
                "Playback updated",
                session_id=str(session_id),
                position=updated.playback_state.position,
                is_playing=updated.playback_state.is_playing,
            )
            return updated

    async def read_state(
        self, session_id: SessionId, user_id: UserId
    ) -> ListenSession:
        """Read a session's playback state as a participant.

        All returned fields come from a single record read.

        Raises:
            NotFoundError: If session not found
            ForbiddenError: If the caller is not a participant
        """
        session = await self.session_service.get_by_id(session_id)
        if not session.is_participant(user_id):
            raise ForbiddenError("You are not part of this session")
        return session
