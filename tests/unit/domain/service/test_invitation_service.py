"""Unit tests for InvitationService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from listen.domain.error import (
    DuplicatePendingError,
    ExpiredError,
    ForbiddenError,
    FriendshipRequiredError,
    InvalidStateError,
    NotFoundError,
    SelfInviteError,
)
from listen.domain.model import Invitation
from listen.domain.model.common import utcnow
from listen.domain.repository import (
    InvitationRepository,
    SessionRepository,
    UserRepository,
)
from listen.domain.service import InvitationService
from listen.domain.value import InvitationId, InvitationStatus, UserId
from tests.conftest import make_friends, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def _store_overdue(invitation_repo, user_repo, from_id, to_id) -> Invitation:
    """Store a pending invitation whose deadline passed a minute ago."""
    invitation = Invitation.create(
        from_id, to_id, utcnow() - timedelta(minutes=11)
    )
    await invitation_repo.save(invitation)
    await user_repo.add_pending_invitation(to_id, invitation.id)
    return invitation


class TestCreateInvitation:
    """Tests for create_invitation."""

    @pytest.mark.asyncio
    async def test_create_invitation_success(self, unit_env):
        """Inviting a friend stores a pending invitation and registers it."""
        # Arrange
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")

        # Act
        invitation = await service.create_invitation(alice.id, bob.id)

        # Assert
        assert invitation.status == InvitationStatus.PENDING
        assert invitation.from_user_id == alice.id
        assert invitation.to_user_id == bob.id
        assert invitation.expires_at - invitation.created_at == timedelta(minutes=10)
        assert await invitation_repo.find_by_id(invitation.id) == invitation
        bob_after = await user_repo.find_by_id(bob.id)
        assert invitation.id in bob_after.pending_invitation_ids

    @pytest.mark.asyncio
    async def test_self_invite_rejected(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        (alice,) = await make_friends(user_repo, "alice")

        with pytest.raises(SelfInviteError):
            await service.create_invitation(alice.id, alice.id)

    @pytest.mark.asyncio
    async def test_unknown_recipient_rejected(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        (alice,) = await make_friends(user_repo, "alice")

        with pytest.raises(NotFoundError):
            await service.create_invitation(alice.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_non_friend_rejected_and_nothing_written(self, unit_env):
        """Inviting a stranger fails before any invitation is stored."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        alice = await user_repo.save(make_user("alice"))
        carol = await user_repo.save(make_user("carol"))

        with pytest.raises(FriendshipRequiredError):
            await service.create_invitation(alice.id, carol.id)

        assert await invitation_repo.find_by_sender(alice.id) == []
        assert (await user_repo.find_by_id(carol.id)).pending_invitation_ids == frozenset()

    @pytest.mark.asyncio
    async def test_friendship_is_read_from_inviter_side(self, unit_env):
        """Only the inviter's friend set is consulted."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        carol = await user_repo.save(make_user("carol"))
        alice = await user_repo.save(make_user("alice", friend_ids={carol.id}))

        invitation = await service.create_invitation(alice.id, carol.id)
        assert invitation.status == InvitationStatus.PENDING

        with pytest.raises(FriendshipRequiredError):
            await service.create_invitation(carol.id, alice.id)

    @pytest.mark.asyncio
    async def test_duplicate_pending_rejected(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        await service.create_invitation(alice.id, bob.id)

        with pytest.raises(DuplicatePendingError):
            await service.create_invitation(alice.id, bob.id)

    @pytest.mark.asyncio
    async def test_reverse_direction_is_not_a_duplicate(self, unit_env):
        """B may invite A while A's invitation to B is pending."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        await service.create_invitation(alice.id, bob.id)

        reverse = await service.create_invitation(bob.id, alice.id)

        assert reverse.from_user_id == bob.id

    @pytest.mark.asyncio
    async def test_overdue_pending_does_not_block_new_invitation(self, unit_env):
        """A stale pending invitation is expired and a fresh one created."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        stale = await _store_overdue(invitation_repo, user_repo, alice.id, bob.id)

        fresh = await service.create_invitation(alice.id, bob.id)

        assert fresh.id != stale.id
        assert (await invitation_repo.find_by_id(stale.id)).status == (
            InvitationStatus.EXPIRED
        )
        pending = (await user_repo.find_by_id(bob.id)).pending_invitation_ids
        assert pending == frozenset({fresh.id})

    @pytest.mark.asyncio
    async def test_invitation_after_decline_allowed(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        first = await service.create_invitation(alice.id, bob.id)
        await service.decline(first.id, bob.id)

        second = await service.create_invitation(alice.id, bob.id)

        assert second.status == InvitationStatus.PENDING


class TestListPending:
    """Tests for list_pending and list_outgoing."""

    @pytest.mark.asyncio
    async def test_lists_live_invitations_newest_first(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        from_alice = await service.create_invitation(alice.id, bob.id)
        from_carol = await service.create_invitation(carol.id, bob.id)

        pending = await service.list_pending(bob.id)

        assert [inv.id for inv in pending] == [from_carol.id, from_alice.id]

    @pytest.mark.asyncio
    async def test_overdue_invitations_are_excluded(self, unit_env):
        """Expired invitations never show up, even before any sweep."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        await _store_overdue(invitation_repo, user_repo, alice.id, bob.id)

        assert await service.list_pending(bob.id) == []
        assert await service.list_outgoing(alice.id) == []

    @pytest.mark.asyncio
    async def test_declined_invitations_are_excluded(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)
        await service.decline(invitation.id, bob.id)

        assert await service.list_pending(bob.id) == []

    @pytest.mark.asyncio
    async def test_list_outgoing(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)

        outgoing = await service.list_outgoing(alice.id)

        assert [inv.id for inv in outgoing] == [invitation.id]
        assert await service.list_outgoing(bob.id) == []


class TestAccept:
    """Tests for accept."""

    @pytest.mark.asyncio
    async def test_accept_starts_session(self, unit_env):
        """Accepting creates a session with the inviter as host."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)

        accepted, session = await service.accept(invitation.id, bob.id)

        assert accepted.status == InvitationStatus.ACCEPTED
        assert accepted.session_id == session.id
        assert session.host_id == alice.id
        assert set(session.participant_ids) == {alice.id, bob.id}
        assert session.is_active
        assert (await user_repo.find_by_id(alice.id)).active_session_id == session.id
        bob_after = await user_repo.find_by_id(bob.id)
        assert bob_after.active_session_id == session.id
        assert invitation.id not in bob_after.pending_invitation_ids

    @pytest.mark.asyncio
    async def test_accept_unknown_invitation(self, unit_env):
        service = await unit_env.get(InvitationService)

        with pytest.raises(NotFoundError):
            await service.accept(InvitationId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_only_recipient_can_accept(self, unit_env):
        """The sender cannot accept their own invitation."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        session_repo = await unit_env.get(SessionRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)

        with pytest.raises(ForbiddenError):
            await service.accept(invitation.id, alice.id)

        assert await session_repo.find_active_by_host(alice.id) == []

    @pytest.mark.asyncio
    async def test_accept_twice_rejected(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)
        await service.accept(invitation.id, bob.id)

        with pytest.raises(InvalidStateError):
            await service.accept(invitation.id, bob.id)

    @pytest.mark.asyncio
    async def test_accept_declined_rejected(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)
        await service.decline(invitation.id, bob.id)

        with pytest.raises(InvalidStateError):
            await service.accept(invitation.id, bob.id)

    @pytest.mark.asyncio
    async def test_accept_overdue_expires_and_persists(self, unit_env):
        """Accepting past the deadline fails and records the expiry."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        session_repo = await unit_env.get(SessionRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        stale = await _store_overdue(invitation_repo, user_repo, alice.id, bob.id)

        with pytest.raises(ExpiredError):
            await service.accept(stale.id, bob.id)

        stored = await invitation_repo.find_by_id(stale.id)
        assert stored.status == InvitationStatus.EXPIRED
        bob_after = await user_repo.find_by_id(bob.id)
        assert stale.id not in bob_after.pending_invitation_ids
        assert bob_after.active_session_id is None
        assert await session_repo.find_active_by_host(alice.id) == []

        # The expiry is final: a retry sees a non-pending invitation
        with pytest.raises(InvalidStateError):
            await service.accept(stale.id, bob.id)

    @pytest.mark.asyncio
    async def test_accept_ends_previous_sessions(self, unit_env):
        """Both users leave whatever session they were in."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        session_repo = await unit_env.get(SessionRepository)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        first = await service.create_invitation(alice.id, bob.id)
        _, old_session = await service.accept(first.id, bob.id)

        second = await service.create_invitation(carol.id, bob.id)
        _, new_session = await service.accept(second.id, bob.id)

        assert not (await session_repo.find_by_id(old_session.id)).is_active
        assert (await user_repo.find_by_id(bob.id)).active_session_id == new_session.id
        assert (await user_repo.find_by_id(carol.id)).active_session_id == new_session.id
        # Alice's pointer still names the ended session until it is read
        assert (await user_repo.find_by_id(alice.id)).active_session_id in (
            None,
            old_session.id,
        )


class TestDecline:
    """Tests for decline."""

    @pytest.mark.asyncio
    async def test_decline_pending(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)

        declined = await service.decline(invitation.id, bob.id)

        assert declined.status == InvitationStatus.DECLINED
        assert (await user_repo.find_by_id(bob.id)).pending_invitation_ids == frozenset()

    @pytest.mark.asyncio
    async def test_decline_overdue_pending_declines(self, unit_env):
        """A stored-pending invitation past its deadline can still be declined."""
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        stale = await _store_overdue(invitation_repo, user_repo, alice.id, bob.id)

        declined = await service.decline(stale.id, bob.id)

        assert declined.status == InvitationStatus.DECLINED

    @pytest.mark.asyncio
    async def test_decline_twice_is_a_no_op(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)
        await service.decline(invitation.id, bob.id)

        again = await service.decline(invitation.id, bob.id)

        assert again.status == InvitationStatus.DECLINED

    @pytest.mark.asyncio
    async def test_decline_expired_is_a_no_op(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        stale = await _store_overdue(invitation_repo, user_repo, alice.id, bob.id)
        with pytest.raises(ExpiredError):
            await service.accept(stale.id, bob.id)

        result = await service.decline(stale.id, bob.id)

        assert result.status == InvitationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_decline_accepted_rejected(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        invitation = await service.create_invitation(alice.id, bob.id)
        await service.accept(invitation.id, bob.id)

        with pytest.raises(InvalidStateError):
            await service.decline(invitation.id, bob.id)

    @pytest.mark.asyncio
    async def test_only_recipient_can_decline(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        invitation = await service.create_invitation(alice.id, bob.id)

        with pytest.raises(ForbiddenError):
            await service.decline(invitation.id, carol.id)


class TestPurgeExpired:
    """Tests for purge_expired."""

    @pytest.mark.asyncio
    async def test_purge_removes_only_overdue_records(self, unit_env):
        service = await unit_env.get(InvitationService)
        user_repo = await unit_env.get(UserRepository)
        invitation_repo = await unit_env.get(InvitationRepository)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        stale = await _store_overdue(invitation_repo, user_repo, alice.id, bob.id)
        live = await service.create_invitation(carol.id, bob.id)

        removed = await service.purge_expired()

        assert removed == 1
        assert await invitation_repo.find_by_id(stale.id) is None
        assert await invitation_repo.find_by_id(live.id) == live
        pending = (await user_repo.find_by_id(bob.id)).pending_invitation_ids
        assert pending == frozenset({live.id})
