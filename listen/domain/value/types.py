"""Domain value objects for listen-together sessions.

Value objects are immutable and defined by their values, not identity.
They are only ever replaced wholesale, never mutated in place.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, StrictBool, field_validator

from listen.domain.value.common import RootValueObject, ValueObject


class InvitationStatus(str, Enum):
    """Status of a listen-together invitation.

    ``pending`` is the only non-terminal status; it may move to any of the
    three terminal statuses and nothing moves out of a terminal status.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING

    def can_transition_to(self, target: "InvitationStatus") -> bool:
        """Check whether ``self -> target`` is a legal transition."""
        return self is InvitationStatus.PENDING and target.is_terminal


class Handle(RootValueObject[str]):
    """Human-readable user handle."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v


class Track(ValueObject):
    """A playable track as described by the client's media catalogue."""

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    artist: str
    uri: str = Field(min_length=1)
    artwork: str | None = None
    duration_seconds: float | None = Field(default=None, ge=0)


class PlaybackState(ValueObject):
    """Transport state of a session.

    ``updated_at`` lets polling participants extrapolate the live position
    while ``is_playing`` is true.
    """

    # Seconds into current track
    position: float = Field(default=0.0, ge=0, strict=True, allow_inf_nan=False)
    is_playing: StrictBool = False
    updated_at: datetime
