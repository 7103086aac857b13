"""Sync playback use case."""

from uuid import UUID

from pydantic import BaseModel, Field, StrictBool
from pydantic import ValidationError as PydanticValidationError

from listen.application.usecase.base import BaseUseCase
from listen.application.usecase.dto import PlaybackStateItem
from listen.domain.error import ValidationError
from listen.domain.model import PlaybackPatch
from listen.domain.service import PlaybackSyncService
from listen.domain.value import SessionId, Track, UserId


class SyncPlaybackRequest(BaseModel):
    """Sync playback request.

    Every playback field is optional; a field that is absent or null keeps
    its current value.
    """

    session_id: str
    user_id: str  # User ID from authenticated user
    # Range is checked by PlaybackPatch so it surfaces as a domain error
    position: float | None = Field(default=None, strict=True, allow_inf_nan=False)
    is_playing: StrictBool | None = None
    current_track: Track | None = None
    queue: list[Track] | None = None


class SyncPlaybackResponse(PlaybackStateItem):
    """Sync playback response: the state after the update."""


class SyncPlaybackUseCase(BaseUseCase):
    """Use case for the host publishing playback state."""

    def __init__(self, playback_service: PlaybackSyncService) -> None:
        """Initialize sync playback use case.

        Args:
            playback_service: Playback sync service
        """
        self.playback_service = playback_service

    async def execute(self, request: SyncPlaybackRequest) -> SyncPlaybackResponse:
        """Execute sync flow.

        Args:
            request: Sync playback request

        Returns:
            The updated playback state

        Raises:
            ValidationError: If a patch field is malformed
            NotFoundError, InvalidStateError, ForbiddenError
        """
        try:
            patch = PlaybackPatch(
                position=request.position,
                is_playing=request.is_playing,
                current_track=request.current_track,
                queue=tuple(request.queue) if request.queue is not None else None,
            )
        except PydanticValidationError as e:
            raise ValidationError(_describe(e))

        session = await self.playback_service.update_playback(
            SessionId(UUID(request.session_id)), UserId(UUID(request.user_id)), patch
        )
        return SyncPlaybackResponse.from_session(session)


def _describe(error: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )
