"""Domain model entities for listen-together sessions."""

from listen.domain.model.invitation import INVITATION_TTL, Invitation
from listen.domain.model.session import ListenSession, PlaybackPatch
from listen.domain.model.user import User

__all__ = [
    "INVITATION_TTL",
    "Invitation",
    "ListenSession",
    "PlaybackPatch",
    "User",
]
