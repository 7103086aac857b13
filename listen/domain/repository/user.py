"""User directory interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional

from listen.domain.model.user import User
from listen.domain.value import InvitationId, SessionId, UserId


class UserRepository(ABC):
    """User directory.

    Friend lookup plus the two pieces of per-user state this service owns:
    the active-session pointer and the inbound pending-invitation set.
    Pointer and set mutations return the updated user, or None when the
    user does not exist.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_friends(self, user_id: UserId) -> list[User]:
        """Find the users in a user's friend set.

        Friend IDs unknown to the directory are skipped.
        """
        pass

    @abstractmethod
    async def is_friend(self, user_id: UserId, other_id: UserId) -> bool:
        """Check whether ``other_id`` is in ``user_id``'s friend set."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update), including its friend set.

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def set_active_session(
        self, user_id: UserId, session_id: SessionId | None
    ) -> Optional[User]:
        """Point a user at a session, or clear the pointer with None.

        Args:
            user_id: The user's ID
            session_id: Session to reference, or None to clear

        Returns:
            The updated user, None if the user does not exist
        """
        pass

    @abstractmethod
    async def clear_active_session(
        self, user_ids: Iterable[UserId], session_id: SessionId
    ) -> int:
        """Clear the pointers of ``user_ids`` that still reference ``session_id``.

        Pointers already moved to another session are left alone.

        Returns:
            Number of pointers cleared
        """
        pass

    @abstractmethod
    async def add_pending_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> Optional[User]:
        """Register an inbound pending invitation on the recipient."""
        pass

    @abstractmethod
    async def remove_pending_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> Optional[User]:
        """Drop an inbound invitation from the recipient (idempotent)."""
        pass
