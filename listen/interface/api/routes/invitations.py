"""Listen-together invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status

from listen.application.usecase.friend import (
    ListFriendsRequest,
    ListFriendsResponse,
    ListFriendsUseCase,
)
from listen.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    DeclineInvitationRequest,
    DeclineInvitationResponse,
    DeclineInvitationUseCase,
    InviteFriendRequest,
    InviteFriendResponse,
    InviteFriendUseCase,
    ListIncomingInvitationsRequest,
    ListIncomingInvitationsResponse,
    ListIncomingInvitationsUseCase,
    ListOutgoingInvitationsRequest,
    ListOutgoingInvitationsResponse,
    ListOutgoingInvitationsUseCase,
)
from listen.domain.service import JWTService
from listen.interface.api.auth import require_user_id

router = APIRouter(
    prefix="/listen-together", tags=["listen-together"], route_class=DishkaRoute
)


@router.post(
    "/invite/{user_id}",
    response_model=InviteFriendResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_friend(
    user_id: UUID,
    invite_friend_use_case: FromDishka[InviteFriendUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> InviteFriendResponse:
    """Invite a friend to listen together.

    Args:
        user_id: Friend to invite
        invite_friend_use_case: Invite friend use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        x_request_timeout: Optional deadline in seconds

    Returns:
        The pending invitation
    """
    caller_id = require_user_id(jwt_service, auth_token)
    request = InviteFriendRequest(from_user_id=caller_id, to_user_id=str(user_id))
    return await invite_friend_use_case.run(request, x_request_timeout)


@router.get("/requests", response_model=ListIncomingInvitationsResponse)
async def list_incoming_invitations(
    list_use_case: FromDishka[ListIncomingInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> ListIncomingInvitationsResponse:
    """List live invitations addressed to the caller, newest first."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = ListIncomingInvitationsRequest(user_id=caller_id)
    return await list_use_case.run(request, x_request_timeout)


@router.get("/requests/sent", response_model=ListOutgoingInvitationsResponse)
async def list_outgoing_invitations(
    list_use_case: FromDishka[ListOutgoingInvitationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> ListOutgoingInvitationsResponse:
    """List the caller's invitations still awaiting an answer."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = ListOutgoingInvitationsRequest(user_id=caller_id)
    return await list_use_case.run(request, x_request_timeout)


@router.post("/requests/{invitation_id}/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    invitation_id: UUID,
    accept_use_case: FromDishka[AcceptInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> AcceptInvitationResponse:
    """Accept an invitation and start listening together.

    Any session either user was in is ended first.

    Args:
        invitation_id: Invitation UUID
        accept_use_case: Accept invitation use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        x_request_timeout: Optional deadline in seconds

    Returns:
        The accepted invitation and the new session
    """
    caller_id = require_user_id(jwt_service, auth_token)
    request = AcceptInvitationRequest(
        invitation_id=str(invitation_id), user_id=caller_id
    )
    return await accept_use_case.run(request, x_request_timeout)


@router.post(
    "/requests/{invitation_id}/decline", response_model=DeclineInvitationResponse
)
async def decline_invitation(
    invitation_id: UUID,
    decline_use_case: FromDishka[DeclineInvitationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> DeclineInvitationResponse:
    """Decline an invitation."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = DeclineInvitationRequest(
        invitation_id=str(invitation_id), user_id=caller_id
    )
    return await decline_use_case.run(request, x_request_timeout)


@router.get("/friends", response_model=ListFriendsResponse)
async def list_friends(
    list_friends_use_case: FromDishka[ListFriendsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    x_request_timeout: float | None = Header(default=None, gt=0),
) -> ListFriendsResponse:
    """List the friends the caller can invite."""
    caller_id = require_user_id(jwt_service, auth_token)
    request = ListFriendsRequest(user_id=caller_id)
    return await list_friends_use_case.run(request, x_request_timeout)
