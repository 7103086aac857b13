"""Invite friend use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import InvitationItem
from listen.domain.model.common import utcnow
from listen.domain.service import InvitationService
from listen.domain.value import UserId


class InviteFriendRequest(BaseModel):
    """Invite friend request."""

    from_user_id: str  # User ID from authenticated user
    to_user_id: str


class InviteFriendResponse(BaseModel):
    """Invite friend response."""

    invitation: InvitationItem


class InviteFriendUseCase(BaseUseCase):
    """Use case for inviting a friend to listen together."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize invite friend use case.

        Args:
            invitation_service: Invitation ledger service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: InviteFriendRequest) -> InviteFriendResponse:
        """Execute invite flow.

        Args:
            request: Invite friend request

        Returns:
            The pending invitation

        Raises:
            SelfInviteError, NotFoundError, FriendshipRequiredError,
            DuplicatePendingError
        """
        invitation = await self.invitation_service.create_invitation(
            UserId(UUID(request.from_user_id)), UserId(UUID(request.to_user_id))
        )
        return InviteFriendResponse(
            invitation=InvitationItem.from_invitation(invitation, utcnow())
        )
