"""PostgreSQL repository implementations."""

from listen.persistence.repository.invitation import PostgresInvitationRepository
from listen.persistence.repository.session import PostgresSessionRepository
from listen.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresInvitationRepository",
    "PostgresSessionRepository",
]
