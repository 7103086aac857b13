"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we map manually
instead of using SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from listen.domain.model import Invitation, ListenSession, User
from listen.domain.value import (
    Handle,
    InvitationId,
    InvitationStatus,
    PlaybackState,
    SessionId,
    Track,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any], friend_ids: Iterable[Any] = ()) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict
        friend_ids: IDs from the user's friendship rows

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        friend_ids=frozenset(UserId(_uuid(fid)) for fid in friend_ids),
        active_session_id=SessionId(_uuid(row["active_session_id"]))
        if row.get("active_session_id")
        else None,
        pending_invitation_ids=frozenset(
            InvitationId(_uuid(iid)) for iid in row.get("pending_invitation_ids") or ()
        ),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to a ``users`` row.

    The friend set lives in the friendships table and is excluded.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump(exclude={"friend_ids"})
    data["pending_invitation_ids"] = sorted(user.pending_invitation_ids)
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        from_user_id=UserId(_uuid(row["from_user_id"])),
        to_user_id=UserId(_uuid(row["to_user_id"])),
        status=InvitationStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        session_id=SessionId(_uuid(row["session_id"]))
        if row.get("session_id")
        else None,
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Args:
        invitation: Invitation domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = invitation.model_dump()
    data["status"] = invitation.status.value
    return data


def row_to_session(row: Dict[str, Any]) -> ListenSession:
    """Convert database row to ListenSession domain model.

    Args:
        row: Database row as dict

    Returns:
        ListenSession domain model
    """
    return ListenSession(
        id=SessionId(_uuid(row["id"])),
        host_id=UserId(_uuid(row["host_id"])),
        participant_ids=tuple(UserId(_uuid(pid)) for pid in row["participant_ids"]),
        current_track=Track.model_validate(row["current_track"])
        if row.get("current_track")
        else None,
        queue=tuple(Track.model_validate(track) for track in row.get("queue") or ()),
        playback_state=PlaybackState(
            position=row["position"],
            is_playing=row["is_playing"],
            updated_at=row["playback_updated_at"],
        ),
        is_active=row["is_active"],
        ended_at=row.get("ended_at"),
        created_at=row["created_at"],
    )


def session_to_dict(session: ListenSession) -> Dict[str, Any]:
    """Convert ListenSession domain model to database dict.

    The playback state is flattened into columns; tracks are stored as JSON.

    Args:
        session: ListenSession domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": session.id,
        "host_id": session.host_id,
        "participant_ids": list(session.participant_ids),
        "current_track": session.current_track.model_dump(mode="json")
        if session.current_track
        else None,
        "queue": [track.model_dump(mode="json") for track in session.queue],
        "position": session.playback_state.position,
        "is_playing": session.playback_state.is_playing,
        "playback_updated_at": session.playback_state.updated_at,
        "is_active": session.is_active,
        "ended_at": session.ended_at,
        "created_at": session.created_at,
    }
