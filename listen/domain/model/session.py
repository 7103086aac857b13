"""Listen session aggregate root.

A session binds a host and participants to one queue and transport state.
Sessions are single-use: once ended they are never reactivated, and a new
accepted invitation always creates a new session.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import Field, StrictBool, model_validator

from listen.domain.error import InvalidStateError
from listen.domain.model.common import DomainModel, utcnow
from listen.domain.value import PlaybackState, SessionId, Track, UserId
from listen.domain.value.common import ValueObject


class PlaybackPatch(ValueObject):
    """Partial playback update sent by the host.

    Fields left unset (or null) keep their previous value on the session.
    """

    position: float | None = Field(
        default=None, ge=0, strict=True, allow_inf_nan=False
    )
    is_playing: StrictBool | None = None
    current_track: Track | None = None
    queue: tuple[Track, ...] | None = None


class ListenSession(DomainModel):
    """Listen session aggregate root.

    Invariants:
    - While active, the host is a participant and participants is non-empty
    - ``is_active`` is False exactly when ``ended_at`` is set
    """

    id: SessionId
    host_id: UserId
    participant_ids: tuple[UserId, ...]
    current_track: Optional[Track] = None
    queue: tuple[Track, ...] = ()
    playback_state: PlaybackState
    is_active: bool = True
    ended_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def validate_lifecycle(self) -> "ListenSession":
        """Validate the active/ended pairing and active membership."""
        if self.is_active == (self.ended_at is not None):
            raise ValueError("is_active must be False exactly when ended_at is set")
        if len(set(self.participant_ids)) != len(self.participant_ids):
            raise ValueError("Participants must be unique")
        if self.is_active and self.host_id not in self.participant_ids:
            raise ValueError("An active session must include its host")
        return self

    @classmethod
    def start(
        cls, host_id: UserId, participant_id: UserId, now: datetime
    ) -> "ListenSession":
        """Create a fresh active session: empty queue, paused at 0."""
        return cls(
            id=SessionId(uuid4()),
            host_id=host_id,
            participant_ids=tuple(dict.fromkeys((host_id, participant_id))),
            current_track=None,
            queue=(),
            playback_state=PlaybackState(position=0.0, is_playing=False, updated_at=now),
            is_active=True,
            ended_at=None,
            created_at=now,
        )

    def is_host(self, user_id: UserId) -> bool:
        return self.host_id == user_id

    def is_participant(self, user_id: UserId) -> bool:
        return user_id in self.participant_ids

    def end(self, now: datetime) -> "ListenSession":
        """End the session. Ending an ended session keeps its ``ended_at``."""
        if not self.is_active:
            return self
        return self.model_copy(update={"is_active": False, "ended_at": now})

    def remove_participant(self, user_id: UserId, now: datetime) -> "ListenSession":
        """Drop a participant, ending the session if the host left or nobody remains."""
        remaining = tuple(p for p in self.participant_ids if p != user_id)
        updated = self.model_copy(update={"participant_ids": remaining})
        if self.is_host(user_id) or not remaining:
            return updated.end(now)
        return updated

    def apply_playback(self, patch: PlaybackPatch, now: datetime) -> "ListenSession":
        """Apply the fields present in ``patch`` and stamp ``updated_at``."""
        if not self.is_active:
            raise InvalidStateError(f"Session {self.id} is no longer active")

        state_changes: dict = {"updated_at": now}
        if patch.position is not None:
            state_changes["position"] = patch.position
        if patch.is_playing is not None:
            state_changes["is_playing"] = patch.is_playing

        changes: dict = {
            "playback_state": self.playback_state.model_copy(update=state_changes)
        }
        if patch.current_track is not None:
            changes["current_track"] = patch.current_track
        if patch.queue is not None:
            changes["queue"] = patch.queue

        return self.model_copy(update=changes)
