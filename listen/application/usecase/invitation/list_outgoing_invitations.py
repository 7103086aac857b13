"""List outgoing invitations use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import InvitationItem
from listen.domain.model.common import utcnow
from listen.domain.service import InvitationService
from listen.domain.value import UserId


class ListOutgoingInvitationsRequest(BaseModel):
    """List outgoing invitations request."""

    user_id: str  # User ID from authenticated user


class ListOutgoingInvitationsResponse(BaseModel):
    """List outgoing invitations response."""

    invitations: list[InvitationItem]


class ListOutgoingInvitationsUseCase(BaseUseCase):
    """Use case for listing the caller's invitations still awaiting an answer."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: ListOutgoingInvitationsRequest
    ) -> ListOutgoingInvitationsResponse:
        invitations = await self.invitation_service.list_outgoing(
            UserId(UUID(request.user_id))
        )
        now = utcnow()
        return ListOutgoingInvitationsResponse(
            invitations=[InvitationItem.from_invitation(inv, now) for inv in invitations]
        )
