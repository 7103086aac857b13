"""List friends use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.domain.service import UserService
from listen.domain.value import UserId


class FriendItem(BaseModel):
    """Friend the caller can invite."""

    user_id: str
    handle: str
    in_session: bool


class ListFriendsRequest(BaseModel):
    """List friends request."""

    user_id: str  # User ID from authenticated user


class ListFriendsResponse(BaseModel):
    """List friends response."""

    friends: list[FriendItem]


class ListFriendsUseCase(BaseUseCase):
    """Use case for listing the friends the caller can invite."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize list friends use case.

        Args:
            user_service: User service
        """
        self.user_service = user_service

    async def execute(self, request: ListFriendsRequest) -> ListFriendsResponse:
        """Execute list flow.

        ``in_session`` reflects the friend's cached pointer and may lag
        behind a session that has just ended.

        Raises:
            NotFoundError: If the caller is unknown to the directory
        """
        friends = await self.user_service.list_friends(UserId(UUID(request.user_id)))
        return ListFriendsResponse(
            friends=[
                FriendItem(
                    user_id=str(friend.id),
                    handle=friend.handle.root,
                    in_session=friend.active_session_id is not None,
                )
                for friend in friends
            ]
        )
