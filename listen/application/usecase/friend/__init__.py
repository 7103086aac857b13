"""Friend use cases."""

from listen.application.usecase.friend.list_friends import (
    FriendItem,
    ListFriendsRequest,
    ListFriendsResponse,
    ListFriendsUseCase,
)

__all__ = [
    "FriendItem",
    "ListFriendsRequest",
    "ListFriendsResponse",
    "ListFriendsUseCase",
]
