"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from listen.domain.error import NotFoundError
from listen.domain.repository import UserRepository
from listen.domain.service import UserService
from listen.domain.value import UserId
from tests.conftest import make_friends, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_get_by_id_not_found(unit_env):
    service = await unit_env.get(UserService)

    with pytest.raises(NotFoundError):
        await service.get_by_id(UserId(uuid4()))


@pytest.mark.asyncio
async def test_list_friends_sorted_by_handle(unit_env):
    service = await unit_env.get(UserService)
    user_repo = await unit_env.get(UserRepository)
    zed, alice, mia = await make_friends(user_repo, "zed", "alice", "mia")

    friends = await service.list_friends(zed.id)

    assert [f.handle.root for f in friends] == ["alice", "mia"]


@pytest.mark.asyncio
async def test_list_friends_skips_unknown_ids(unit_env):
    """Friend IDs with no directory entry are left out."""
    service = await unit_env.get(UserService)
    user_repo = await unit_env.get(UserRepository)
    lonely = await user_repo.save(make_user("lonely", friend_ids={UserId(uuid4())}))

    assert await service.list_friends(lonely.id) == []


@pytest.mark.asyncio
async def test_get_handles(unit_env):
    service = await unit_env.get(UserService)
    user_repo = await unit_env.get(UserRepository)
    alice, bob = await make_friends(user_repo, "alice", "bob")
    ghost = UserId(uuid4())

    handles = await service.get_handles([alice.id, bob.id, alice.id, ghost])

    assert handles == {alice.id: "alice", bob.id: "bob"}
