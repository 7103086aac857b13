"""Domain value objects for listen-together sessions."""

from listen.domain.value.identifiers import InvitationId, SessionId, UserId
from listen.domain.value.types import (
    Handle,
    InvitationStatus,
    PlaybackState,
    Track,
)

__all__ = [
    # Identifiers
    "UserId",
    "InvitationId",
    "SessionId",
    # Types
    "Handle",
    "InvitationStatus",
    "PlaybackState",
    "Track",
]
