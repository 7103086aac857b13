"""List incoming invitations use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import InvitationItem
from listen.domain.model.common import utcnow
from listen.domain.service import InvitationService, UserService
from listen.domain.value import UserId


class ListIncomingInvitationsRequest(BaseModel):
    """List incoming invitations request."""

    user_id: str  # User ID from authenticated user


class ListIncomingInvitationsResponse(BaseModel):
    """List incoming invitations response."""

    invitations: list[InvitationItem]


class ListIncomingInvitationsUseCase(BaseUseCase):
    """Use case for listing live invitations addressed to the caller."""

    def __init__(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> None:
        """Initialize list incoming invitations use case.

        Args:
            invitation_service: Invitation ledger service
            user_service: User service, for sender handles
        """
        self.invitation_service = invitation_service
        self.user_service = user_service

    async def execute(
        self, request: ListIncomingInvitationsRequest
    ) -> ListIncomingInvitationsResponse:
        """Execute list flow.

        Args:
            request: List incoming invitations request

        Returns:
            Pending, unexpired invitations, newest first
        """
        invitations = await self.invitation_service.list_pending(
            UserId(UUID(request.user_id))
        )
        handles = await self.user_service.get_handles(
            inv.from_user_id for inv in invitations
        )
        now = utcnow()
        return ListIncomingInvitationsResponse(
            invitations=[
                InvitationItem.from_invitation(
                    inv, now, from_handle=handles.get(inv.from_user_id)
                )
                for inv in invitations
            ]
        )
