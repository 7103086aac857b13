"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from listen.domain.model import User
from listen.domain.model.common import utcnow
from listen.domain.repository import UserRepository
from listen.domain.value import Handle, Track, UserId


def make_user(handle: str, friend_ids: set[UserId] | None = None) -> User:
    """Build a user with a fresh ID."""
    return User(
        id=UserId(uuid4()),
        handle=Handle(handle),
        friend_ids=frozenset(friend_ids or ()),
    )


async def make_friends(user_repo: UserRepository, *handles: str) -> list[User]:
    """Save users who are all friends with each other.

    Every user is stored before any friendship is linked, so directories
    that enforce referential integrity accept the friend sets.

    Args:
        user_repo: Repository to save into
        handles: One handle per user

    Returns:
        The saved users, in ``handles`` order
    """
    users = [await user_repo.save(make_user(handle)) for handle in handles]
    saved = []
    for user in users:
        friends = frozenset(other.id for other in users if other.id != user.id)
        saved.append(
            await user_repo.save(user.model_copy(update={"friend_ids": friends}))
        )
    return saved


def make_track(title: str = "Blue in Green", artist: str = "Miles Davis") -> Track:
    """Build a track value."""
    track_id = title.lower().replace(" ", "-")
    return Track(
        id=track_id,
        title=title,
        artist=artist,
        uri=f"catalog:track:{track_id}",
        duration_seconds=337.0,
    )


def minutes_ago(minutes: float, now: datetime | None = None) -> datetime:
    """A timezone-aware instant ``minutes`` before now."""
    return (now or utcnow()) - timedelta(minutes=minutes)
