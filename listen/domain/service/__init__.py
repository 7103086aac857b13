"""Domain services."""

from .base import Service
from .invitation_service import InvitationService
from .jwt_service import JWTService
from .lifecycle_service import SessionLifecycleService
from .playback_service import PlaybackSyncService
from .session_service import SessionService
from .user_service import UserService

__all__ = [
    "InvitationService",
    "JWTService",
    "PlaybackSyncService",
    "Service",
    "SessionLifecycleService",
    "SessionService",
    "UserService",
]
