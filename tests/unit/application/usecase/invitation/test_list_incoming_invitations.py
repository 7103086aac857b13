"""Unit tests for the invitation listing use cases."""

import pytest

from listen.application.usecase.invitation import (
    InviteFriendRequest,
    InviteFriendUseCase,
    ListIncomingInvitationsRequest,
    ListIncomingInvitationsUseCase,
    ListOutgoingInvitationsRequest,
    ListOutgoingInvitationsUseCase,
)
from listen.domain.repository import UserRepository
from listen.domain.value import InvitationStatus
from tests.conftest import make_friends
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListInvitations:
    """Tests for listing incoming and outgoing invitations."""

    @pytest.mark.asyncio
    async def test_incoming_invitations_carry_sender_handle(self, unit_env):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        invite_use_case = await unit_env.get(InviteFriendUseCase)
        list_use_case = await unit_env.get(ListIncomingInvitationsUseCase)
        alice, bob = await make_friends(user_repo, "alice", "bob")
        created = await invite_use_case.execute(
            InviteFriendRequest(from_user_id=str(alice.id), to_user_id=str(bob.id))
        )

        # Act
        response = await list_use_case.execute(
            ListIncomingInvitationsRequest(user_id=str(bob.id))
        )

        # Assert
        assert len(response.invitations) == 1
        item = response.invitations[0]
        assert item.invitation_id == created.invitation.invitation_id
        assert item.from_user_id == str(alice.id)
        assert item.from_handle == "alice"
        assert item.status == InvitationStatus.PENDING

    @pytest.mark.asyncio
    async def test_empty_inbox(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        list_use_case = await unit_env.get(ListIncomingInvitationsUseCase)
        (alice,) = await make_friends(user_repo, "alice")

        response = await list_use_case.execute(
            ListIncomingInvitationsRequest(user_id=str(alice.id))
        )

        assert response.invitations == []

    @pytest.mark.asyncio
    async def test_outgoing_invitations(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        invite_use_case = await unit_env.get(InviteFriendUseCase)
        list_use_case = await unit_env.get(ListOutgoingInvitationsUseCase)
        alice, bob, carol = await make_friends(user_repo, "alice", "bob", "carol")
        for friend in (bob, carol):
            await invite_use_case.execute(
                InviteFriendRequest(from_user_id=str(alice.id), to_user_id=str(friend.id))
            )

        response = await list_use_case.execute(
            ListOutgoingInvitationsRequest(user_id=str(alice.id))
        )

        assert {item.to_user_id for item in response.invitations} == {
            str(bob.id),
            str(carol.id),
        }
