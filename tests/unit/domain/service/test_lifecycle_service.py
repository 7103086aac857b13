"""Unit tests for SessionLifecycleService."""

from uuid import uuid4

import pytest

from listen.domain.error import ForbiddenError, NotFoundError
from listen.domain.model import ListenSession
from listen.domain.model.common import utcnow
from listen.domain.repository import SessionRepository, UserRepository
from listen.domain.service import SessionLifecycleService
from listen.domain.value import SessionId, UserId
from tests.conftest import make_friends
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestStartSession:
    """Tests for start_session."""

    @pytest.mark.asyncio
    async def test_start_points_both_users_at_new_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")

        session = await service.start_session(alice.id, bob.id)

        assert session.is_active
        assert session.host_id == alice.id
        assert session.participant_ids == (alice.id, bob.id)
        assert session.queue == ()
        assert session.current_track is None
        assert session.playback_state.position == 0
        assert session.playback_state.is_playing is False
        for user in (alice, bob):
            assert (await user_repo.find_by_id(user.id)).active_session_id == session.id

    @pytest.mark.asyncio
    async def test_start_supersedes_prior_sessions(self, unit_env):
        """Any active session either user is bound to is ended first."""
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        session_repo = await unit_env.get(SessionRepository)
        alice, bob, carol, dave = await make_friends(
            user_repo, "alice", "bob", "carol", "dave"
        )
        alice_old = await service.start_session(alice.id, bob.id)
        carol_old = await service.start_session(carol.id, dave.id)

        session = await service.start_session(alice.id, carol.id)

        assert not (await session_repo.find_by_id(alice_old.id)).is_active
        ended = await session_repo.find_by_id(carol_old.id)
        assert not ended.is_active
        assert ended.ended_at is not None
        assert (await user_repo.find_by_id(alice.id)).active_session_id == session.id
        assert (await user_repo.find_by_id(carol.id)).active_session_id == session.id
        assert await session_repo.find_active_by_participant(carol.id) == [session]

    @pytest.mark.asyncio
    async def test_start_with_unknown_user(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        (alice,) = await make_friends(user_repo, "alice")

        with pytest.raises(NotFoundError):
            await service.start_session(alice.id, UserId(uuid4()))


class TestLeave:
    """Tests for leave."""

    @pytest.mark.asyncio
    async def test_participant_leaving_keeps_session_alive(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)

        updated = await service.leave(session.id, bob.id)

        assert updated.is_active
        assert updated.participant_ids == (alice.id,)
        assert (await user_repo.find_by_id(bob.id)).active_session_id is None
        assert (await user_repo.find_by_id(alice.id)).active_session_id == session.id

    @pytest.mark.asyncio
    async def test_host_leaving_ends_session_and_releases_everyone(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)

        updated = await service.leave(session.id, alice.id)

        assert not updated.is_active
        assert updated.ended_at is not None
        for user in (alice, bob):
            assert (await user_repo.find_by_id(user.id)).active_session_id is None

    @pytest.mark.asyncio
    async def test_last_participant_leaving_ends_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)
        await service.leave(session.id, bob.id)

        updated = await service.leave(session.id, alice.id)

        assert not updated.is_active
        assert updated.participant_ids == ()

    @pytest.mark.asyncio
    async def test_leave_is_idempotent_for_non_participant(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        session = await service.start_session(alice.id, bob.id)

        updated = await service.leave(session.id, carol.id)

        assert updated.is_active
        assert updated.participant_ids == (alice.id, bob.id)

    @pytest.mark.asyncio
    async def test_release_skips_pointers_moved_elsewhere(self, unit_env):
        """Ending a session never clears a pointer to a newer session."""
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        old = await service.start_session(alice.id, bob.id)
        # Bob is still listed on the old session but now points elsewhere
        await user_repo.set_active_session(bob.id, SessionId(uuid4()))
        moved_to = (await user_repo.find_by_id(bob.id)).active_session_id

        await service.leave(old.id, alice.id)

        assert (await user_repo.find_by_id(bob.id)).active_session_id == moved_to

    @pytest.mark.asyncio
    async def test_leave_unknown_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        (alice,) = await make_friends(user_repo, "alice")

        with pytest.raises(NotFoundError):
            await service.leave(SessionId(uuid4()), alice.id)


class TestEnd:
    """Tests for end."""

    @pytest.mark.asyncio
    async def test_host_ends_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)

        ended = await service.end(session.id, alice.id)

        assert not ended.is_active
        assert ended.participant_ids == (alice.id, bob.id)
        for user in (alice, bob):
            assert (await user_repo.find_by_id(user.id)).active_session_id is None

    @pytest.mark.asyncio
    async def test_participant_cannot_end(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)

        with pytest.raises(ForbiddenError):
            await service.end(session.id, bob.id)

        assert (await service.get_session(session.id, bob.id)).is_active

    @pytest.mark.asyncio
    async def test_ending_twice_keeps_first_end_time(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)
        first = await service.end(session.id, alice.id)

        second = await service.end(session.id, alice.id)

        assert second.ended_at == first.ended_at


class TestGetActive:
    """Tests for get_active."""

    @pytest.mark.asyncio
    async def test_no_pointer_means_no_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        (alice,) = await make_friends(user_repo, "alice")

        assert await service.get_active(alice.id) is None

    @pytest.mark.asyncio
    async def test_returns_active_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)

        assert await service.get_active(bob.id) == session

    @pytest.mark.asyncio
    async def test_stale_pointer_is_repaired(self, unit_env):
        """A pointer to an ended session reads as none and is cleared."""
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        session_repo = await unit_env.get(SessionRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)
        # End the record directly, leaving both pointers behind
        await session_repo.save(session.end(utcnow()))

        assert await service.get_active(bob.id) is None
        assert (await user_repo.find_by_id(bob.id)).active_session_id is None

    @pytest.mark.asyncio
    async def test_dangling_pointer_is_repaired(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        (alice,) = await make_friends(user_repo, "alice")
        await user_repo.set_active_session(alice.id, SessionId(uuid4()))

        assert await service.get_active(alice.id) is None
        assert (await user_repo.find_by_id(alice.id)).active_session_id is None

    @pytest.mark.asyncio
    async def test_unknown_user_has_no_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)

        assert await service.get_active(UserId(uuid4())) is None


class TestGetSession:
    """Tests for get_session."""

    @pytest.mark.asyncio
    async def test_outsider_is_forbidden(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        session = await service.start_session(alice.id, bob.id)

        with pytest.raises(ForbiddenError):
            await service.get_session(session.id, carol.id)

    @pytest.mark.asyncio
    async def test_participant_can_read_ended_session(self, unit_env):
        service = await unit_env.get(SessionLifecycleService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        session = await service.start_session(alice.id, bob.id)
        await service.end(session.id, alice.id)

        fetched = await service.get_session(session.id, bob.id)

        assert isinstance(fetched, ListenSession)
        assert not fetched.is_active
