"""Leave session use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import SessionItem
from listen.domain.service import SessionLifecycleService
from listen.domain.value import SessionId, UserId


class LeaveSessionRequest(BaseModel):
    """Leave session request."""

    session_id: str
    user_id: str  # User ID from authenticated user


class LeaveSessionResponse(BaseModel):
    """Leave session response."""

    session: SessionItem


class LeaveSessionUseCase(BaseUseCase):
    """Use case for leaving a session.

    When the host leaves, or the last participant does, the session ends for
    everyone.
    """

    def __init__(self, lifecycle_service: SessionLifecycleService) -> None:
        """Initialize leave session use case.

        Args:
            lifecycle_service: Session lifecycle service
        """
        self.lifecycle_service = lifecycle_service

    async def execute(self, request: LeaveSessionRequest) -> LeaveSessionResponse:
        """Execute leave flow.

        Args:
            request: Leave session request

        Returns:
            The session after the departure

        Raises:
            NotFoundError: If session or user not found
        """
        session = await self.lifecycle_service.leave(
            SessionId(UUID(request.session_id)), UserId(UUID(request.user_id))
        )
        return LeaveSessionResponse(session=SessionItem.from_session(session))
