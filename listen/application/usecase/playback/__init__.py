"""Playback use cases."""

from listen.application.usecase.playback.read_playback_state import (
    ReadPlaybackStateRequest,
    ReadPlaybackStateResponse,
    ReadPlaybackStateUseCase,
)
from listen.application.usecase.playback.sync_playback import (
    SyncPlaybackRequest,
    SyncPlaybackResponse,
    SyncPlaybackUseCase,
)

__all__ = [
    "ReadPlaybackStateRequest",
    "ReadPlaybackStateResponse",
    "ReadPlaybackStateUseCase",
    "SyncPlaybackRequest",
    "SyncPlaybackResponse",
    "SyncPlaybackUseCase",
]
