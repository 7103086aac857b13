"""Listen session repository interface."""

from abc import ABC, abstractmethod

from listen.domain.model.session import ListenSession
from listen.domain.value import SessionId, UserId


class SessionRepository(ABC):
    """Repository for ListenSession aggregate.

    Each save replaces the whole record; concurrent writers to the same
    session resolve by last write wins.
    """

    @abstractmethod
    async def find_by_id(self, session_id: SessionId) -> ListenSession | None:
        """Find a session by ID.

        Args:
            session_id: The session's unique identifier

        Returns:
            The session if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, session: ListenSession) -> ListenSession:
        """Save a session (create or update).

        Args:
            session: The session to save

        Returns:
            The saved session
        """
        pass

    @abstractmethod
    async def find_active_by_host(self, host_id: UserId) -> list[ListenSession]:
        """Find active sessions hosted by a user.

        Args:
            host_id: The host's ID

        Returns:
            Active sessions, newest first
        """
        pass

    @abstractmethod
    async def find_active_by_participant(
        self, user_id: UserId
    ) -> list[ListenSession]:
        """Find active sessions a user participates in.

        Args:
            user_id: The participant's ID

        Returns:
            Active sessions, newest first
        """
        pass
