"""Decline invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import InvitationItem
from listen.domain.model.common import utcnow
from listen.domain.service import InvitationService
from listen.domain.value import InvitationId, UserId


class DeclineInvitationRequest(BaseModel):
    """Decline invitation request."""

    invitation_id: str
    user_id: str  # User ID from authenticated user


class DeclineInvitationResponse(BaseModel):
    """Decline invitation response."""

    invitation: InvitationItem


class DeclineInvitationUseCase(BaseUseCase):
    """Use case for declining an invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(
        self, request: DeclineInvitationRequest
    ) -> DeclineInvitationResponse:
        invitation = await self.invitation_service.decline(
            InvitationId(UUID(request.invitation_id)), UserId(UUID(request.user_id))
        )
        return DeclineInvitationResponse(
            invitation=InvitationItem.from_invitation(invitation, utcnow())
        )
