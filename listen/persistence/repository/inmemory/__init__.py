"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationRepository
from .session import InMemorySessionRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryInvitationRepository",
    "InMemorySessionRepository",
    "InMemoryUserRepository",
]
