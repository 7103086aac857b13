"""Get active session use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import SessionItem
from listen.domain.service import SessionLifecycleService
from listen.domain.value import UserId


class GetActiveSessionRequest(BaseModel):
    """Get active session request."""

    user_id: str  # User ID from authenticated user


class GetActiveSessionResponse(BaseModel):
    """Get active session response. ``session`` is None when idle."""

    session: SessionItem | None


class GetActiveSessionUseCase(BaseUseCase):
    """Use case for resolving the caller's active session."""

    def __init__(self, lifecycle_service: SessionLifecycleService) -> None:
        """Initialize get active session use case.

        Args:
            lifecycle_service: Session lifecycle service
        """
        self.lifecycle_service = lifecycle_service

    async def execute(
        self, request: GetActiveSessionRequest
    ) -> GetActiveSessionResponse:
        """Execute lookup, repairing a stale pointer on the way.

        A caller unknown to the directory gets ``session=None``.
        """
        session = await self.lifecycle_service.get_active(
            UserId(UUID(request.user_id))
        )
        return GetActiveSessionResponse(
            session=SessionItem.from_session(session) if session else None
        )
