"""In-memory user directory for testing."""

from typing import Iterable, Optional

from listen.domain.model.user import User
from listen.domain.repository.user import UserRepository
from listen.domain.value import InvitationId, SessionId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_friends(self, user_id: UserId) -> list[User]:
        """Find the users in a user's friend set."""
        user = self._users.get(user_id)
        if not user:
            return []
        return [
            self._users[friend_id]
            for friend_id in user.friend_ids
            if friend_id in self._users
        ]

    async def is_friend(self, user_id: UserId, other_id: UserId) -> bool:
        """Check whether ``other_id`` is in ``user_id``'s friend set."""
        user = self._users.get(user_id)
        return bool(user and user.is_friend_of(other_id))

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def set_active_session(
        self, user_id: UserId, session_id: SessionId | None
    ) -> Optional[User]:
        """Point a user at a session, or clear the pointer with None."""
        return self._update(user_id, active_session_id=session_id)

    async def clear_active_session(
        self, user_ids: Iterable[UserId], session_id: SessionId
    ) -> int:
        """Clear the pointers of ``user_ids`` that still reference ``session_id``."""
        cleared = 0
        for user_id in user_ids:
            user = self._users.get(user_id)
            if user and user.active_session_id == session_id:
                self._update(user_id, active_session_id=None)
                cleared += 1
        return cleared

    async def add_pending_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> Optional[User]:
        """Register an inbound pending invitation on the recipient."""
        user = self._users.get(user_id)
        if not user:
            return None
        return self._update(
            user_id, pending_invitation_ids=user.pending_invitation_ids | {invitation_id}
        )

    async def remove_pending_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> Optional[User]:
        """Drop an inbound invitation from the recipient."""
        user = self._users.get(user_id)
        if not user:
            return None
        return self._update(
            user_id, pending_invitation_ids=user.pending_invitation_ids - {invitation_id}
        )

    def _update(self, user_id: UserId, **changes) -> Optional[User]:
        user = self._users.get(user_id)
        if not user:
            return None
        updated = user.model_copy(update=changes)
        self._users[user_id] = updated
        return updated
