"""Get session use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import SessionItem
from listen.domain.service import SessionLifecycleService
from listen.domain.value import SessionId, UserId


class GetSessionRequest(BaseModel):
    """Get session request."""

    session_id: str
    user_id: str  # User ID from authenticated user


class GetSessionResponse(BaseModel):
    """Get session response."""

    session: SessionItem


class GetSessionUseCase(BaseUseCase):
    """Use case for reading a session the caller takes part in."""

    def __init__(self, lifecycle_service: SessionLifecycleService) -> None:
        self.lifecycle_service = lifecycle_service

    async def execute(self, request: GetSessionRequest) -> GetSessionResponse:
        session = await self.lifecycle_service.get_session(
            SessionId(UUID(request.session_id)), UserId(UUID(request.user_id))
        )
        return GetSessionResponse(session=SessionItem.from_session(session))
