"""Invitation use cases."""

from listen.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from listen.application.usecase.invitation.decline_invitation import (
    DeclineInvitationRequest,
    DeclineInvitationResponse,
    DeclineInvitationUseCase,
)
from listen.application.usecase.invitation.invite_friend import (
    InviteFriendRequest,
    InviteFriendResponse,
    InviteFriendUseCase,
)
from listen.application.usecase.invitation.list_incoming_invitations import (
    ListIncomingInvitationsRequest,
    ListIncomingInvitationsResponse,
    ListIncomingInvitationsUseCase,
)
from listen.application.usecase.invitation.list_outgoing_invitations import (
    ListOutgoingInvitationsRequest,
    ListOutgoingInvitationsResponse,
    ListOutgoingInvitationsUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "DeclineInvitationRequest",
    "DeclineInvitationResponse",
    "DeclineInvitationUseCase",
    "InviteFriendRequest",
    "InviteFriendResponse",
    "InviteFriendUseCase",
    "ListIncomingInvitationsRequest",
    "ListIncomingInvitationsResponse",
    "ListIncomingInvitationsUseCase",
    "ListOutgoingInvitationsRequest",
    "ListOutgoingInvitationsResponse",
    "ListOutgoingInvitationsUseCase",
]
