"""Read playback state use case."""

from uuid import UUID

from pydantic import BaseModel

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import PlaybackStateItem
from listen.domain.service import PlaybackSyncService
from listen.domain.value import SessionId, UserId


class ReadPlaybackStateRequest(BaseModel):
    """Read playback state request."""

    session_id: str
    user_id: str  # User ID from authenticated user


class ReadPlaybackStateResponse(PlaybackStateItem):
    """Read playback state response."""


class ReadPlaybackStateUseCase(BaseUseCase):
    """Use case for participants polling the host's playback state."""

    def __init__(self, playback_service: PlaybackSyncService) -> None:
        self.playback_service = playback_service

    async def execute(
        self, request: ReadPlaybackStateRequest
    ) -> ReadPlaybackStateResponse:
        session = await self.playback_service.read_state(
            SessionId(UUID(request.session_id)), UserId(UUID(request.user_id))
        )
        return ReadPlaybackStateResponse.from_session(session)
