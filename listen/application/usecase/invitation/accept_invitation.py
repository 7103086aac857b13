"""Accept invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import InvitationItem, SessionItem
from listen.domain.model.common import utcnow
from listen.domain.service import InvitationService
from listen.domain.value import InvitationId, UserId


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    invitation_id: str
    user_id: str  # User ID from authenticated user


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    invitation: InvitationItem
    session: SessionItem


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for accepting an invitation, which starts a session."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize accept invitation use case.

        Args:
            invitation_service: Invitation ledger service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        """Execute accept flow.

        Args:
            request: Accept invitation request

        Returns:
            The accepted invitation and the new active session

        Raises:
            NotFoundError, ForbiddenError, InvalidStateError, ExpiredError
        """
        invitation, session = await self.invitation_service.accept(
            InvitationId(UUID(request.invitation_id)), UserId(UUID(request.user_id))
        )
        return AcceptInvitationResponse(
            invitation=InvitationItem.from_invitation(invitation, utcnow()),
            session=SessionItem.from_session(session),
        )
