"""Listen session routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel, Field, StrictBool

from listen.application.usecase.playback import (
    ReadPlaybackStateRequest,
    ReadPlaybackStateResponse,
    ReadPlaybackStateUseCase,
    SyncPlaybackRequest,
    SyncPlaybackResponse,
    SyncPlaybackUseCase,
)
from listen.application.usecase.session import (
    EndSessionRequest,
    EndSessionResponse,
    EndSessionUseCase,
    GetActiveSessionRequest,
    GetActiveSessionResponse,
    GetActiveSessionUseCase,
    GetSessionRequest,
    GetSessionResponse,
    GetSessionUseCase,
    LeaveSessionRequest,
    LeaveSessionResponse,
    LeaveSessionUseCase,
)
from listen.domain.service import JWTService
from listen.domain.value import Track
from listen.interface.api.auth import require_user_id

router = APIRouter(
    prefix="/listen-sessions", tags=["listen-sessions"], route_class=DishkaRoute
)


class SyncPlaybackAPIRequest(BaseModel):
    """API request for a playback update. Omitted fields are left unchanged."""

    position: float | None = Field(
        default=None, ge=0, strict=True, allow_inf_nan=False
    )
    is_playing: StrictBool | None = None
    current_track: Track | None = None
    queue: list[Track] | None = None


# Declared before /{session_id} so "active" is not parsed as a session ID
@router.get("/active", response_model=GetActiveSessionResponse)
async def get_active_session(
    get_active_use_case: FromDishka[GetActiveSessionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> GetActiveSessionResponse:
    """Get the caller's active session, if any.

    Returns:
        The active session, or ``{"session": null}`` when idle
    """
    caller_id = require_user_id(jwt_service, auth_token)
    request = GetActiveSessionRequest(user_id=caller_id)
    return await get_active_use_case.run(request, x_request_timeout)


@router.get("/{session_id}", response_model=GetSessionResponse)
async def get_session(
    session_id: UUID,
    get_session_use_case: FromDishka[GetSessionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> GetSessionResponse:
    """Get a session the caller takes part in."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = GetSessionRequest(session_id=str(session_id), user_id=caller_id)
    return await get_session_use_case.run(request, x_request_timeout)


@router.post("/{session_id}/sync", response_model=SyncPlaybackResponse)
async def sync_playback(
    session_id: UUID,
    body: SyncPlaybackAPIRequest,
    sync_use_case: FromDishka[SyncPlaybackUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> SyncPlaybackResponse:
    """Publish the host's playback state.

    Only the host may call this.

    Args:
        session_id: Session UUID
        body: Fields to change
        sync_use_case: Sync playback use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        x_request_timeout: Optional deadline in seconds

    Returns:
        The playback state after the update
    """
    caller_id = require_user_id(jwt_service, auth_token)
    request = SyncPlaybackRequest(
        session_id=str(session_id),
        user_id=caller_id,
        **body.model_dump(exclude_unset=True),
    )
    return await sync_use_case.run(request, x_request_timeout)


@router.get("/{session_id}/state", response_model=ReadPlaybackStateResponse)
async def read_playback_state(
    session_id: UUID,
    read_state_use_case: FromDishka[ReadPlaybackStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> ReadPlaybackStateResponse:
    """Poll the session's playback state as a participant."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = ReadPlaybackStateRequest(session_id=str(session_id), user_id=caller_id)
    return await read_state_use_case.run(request, x_request_timeout)


@router.post("/{session_id}/leave", response_model=LeaveSessionResponse)
async def leave_session(
    session_id: UUID,
    leave_use_case: FromDishka[LeaveSessionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> LeaveSessionResponse:
    """Leave a session. The session ends if the host leaves."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = LeaveSessionRequest(session_id=str(session_id), user_id=caller_id)
    return await leave_use_case.run(request, x_request_timeout)


@router.post("/{session_id}/end", response_model=EndSessionResponse)
async def end_session(
    session_id: UUID,
    end_use_case: FromDishka[EndSessionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> EndSessionResponse:
    """End a session for everyone. Only the host may call this."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = EndSessionRequest(session_id=str(session_id), user_id=caller_id)
    return await end_use_case.run(request, x_request_timeout)
