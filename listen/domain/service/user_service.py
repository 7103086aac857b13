"""User domain service."""

from collections.abc import Iterable

import logfire

from listen.domain.error import NotFoundError
from listen.domain.model import User
from listen.domain.repository import UserRepository
from listen.domain.value import UserId

from .base import Service


class UserService(Service):
    """Domain service for user directory reads."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def list_friends(self, user_id: UserId) -> list[User]:
        """List a user's friends, ordered by handle.

        Args:
            user_id: User ID

        Returns:
            Friends known to the directory

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.list_friends", user_id=str(user_id)):
            await self.get_by_id(user_id)
            friends = await self.user_repository.find_friends(user_id)
            logfire.info(
                "Friends listed", user_id=str(user_id), count=len(friends)
            )
            return sorted(friends, key=lambda friend: friend.handle.root)

    async def get_handles(self, user_ids: Iterable[UserId]) -> dict[UserId, str]:
        """Resolve handles for display. Unknown users are left out."""
        handles: dict[UserId, str] = {}
        for user_id in set(user_ids):
            user = await self.user_repository.find_by_id(user_id)
            if user:
                handles[user_id] = user.handle.root
        return handles
