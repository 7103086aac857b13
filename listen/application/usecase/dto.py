"""Response items shared by several use cases."""

from datetime import datetime

from pydantic import BaseModel

from listen.domain.model import Invitation, ListenSession
from listen.domain.value import InvitationStatus, PlaybackState, Track


class InvitationItem(BaseModel):
    """Invitation as returned to clients."""

    invitation_id: str
    from_user_id: str
    to_user_id: str
    status: InvitationStatus  # Effective status at read time
    created_at: datetime
    expires_at: datetime
    session_id: str | None = None
    from_handle: str | None = None

    @classmethod
    def from_invitation(
        cls, invitation: Invitation, now: datetime, from_handle: str | None = None
    ) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            from_user_id=str(invitation.from_user_id),
            to_user_id=str(invitation.to_user_id),
            status=invitation.effective_status(now),
            created_at=invitation.created_at,
            expires_at=invitation.expires_at,
            session_id=str(invitation.session_id) if invitation.session_id else None,
            from_handle=from_handle,
        )


class SessionItem(BaseModel):
    """Full session record as returned to clients."""

    session_id: str
    host_id: str
    participant_ids: list[str]
    current_track: Track | None
    queue: list[Track]
    playback_state: PlaybackState
    is_active: bool
    ended_at: datetime | None
    created_at: datetime

    @classmethod
    def from_session(cls, session: ListenSession) -> "SessionItem":
        return cls(
            session_id=str(session.id),
            host_id=str(session.host_id),
            participant_ids=[str(p) for p in session.participant_ids],
            current_track=session.current_track,
            queue=list(session.queue),
            playback_state=session.playback_state,
            is_active=session.is_active,
            ended_at=session.ended_at,
            created_at=session.created_at,
        )


class PlaybackStateItem(BaseModel):
    """What a participant needs to mirror the host's playback."""

    session_id: str
    host_id: str
    current_track: Track | None
    queue: list[Track]
    playback_state: PlaybackState
    is_active: bool

    @classmethod
    def from_session(cls, session: ListenSession) -> "PlaybackStateItem":
        return cls(
            session_id=str(session.id),
            host_id=str(session.host_id),
            current_track=session.current_track,
            queue=list(session.queue),
            playback_state=session.playback_state,
            is_active=session.is_active,
        )
