"""End session use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import SessionItem
from listen.domain.service import SessionLifecycleService
from listen.domain.value import SessionId, UserId


class EndSessionRequest(BaseModel):
    """End session request."""

    session_id: str
    user_id: str  # User ID from authenticated user


class EndSessionResponse(BaseModel):
    """End session response."""

    session: SessionItem


class EndSessionUseCase(BaseUseCase):
    """Use case for the host ending a session."""

    def __init__(self, lifecycle_service: SessionLifecycleService) -> None:
        self.lifecycle_service = lifecycle_service

    async def execute(self, request: EndSessionRequest) -> EndSessionResponse:
        """Execute end flow.

        Raises:
            NotFoundError: If session not found
            ForbiddenError: If the caller is not the host
        """
        session = await self.lifecycle_service.end(
            SessionId(UUID(request.session_id)), UserId(UUID(request.user_id))
        )
        return EndSessionResponse(session=SessionItem.from_session(session))
