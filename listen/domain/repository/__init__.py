"""Repository interfaces for the listen-together domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from listen.domain.repository.invitation import InvitationRepository
from listen.domain.repository.session import SessionRepository
from listen.domain.repository.user import UserRepository

__all__ = [
    "InvitationRepository",
    "SessionRepository",
    "UserRepository",
]
