"""Application layer DI providers."""

from dishka import Scope, provide

from listen.application.usecase.friend import ListFriendsUseCase
from listen.application.usecase.invitation import (
    AcceptInvitationUseCase,
    DeclineInvitationUseCase,
    InviteFriendUseCase,
    ListIncomingInvitationsUseCase,
    ListOutgoingInvitationsUseCase,
)
from listen.application.usecase.playback import (
    ReadPlaybackStateUseCase,
    SyncPlaybackUseCase,
)
from listen.application.usecase.session import (
    EndSessionUseCase,
    GetActiveSessionUseCase,
    GetSessionUseCase,
    LeaveSessionUseCase,
)
from listen.domain.service import (
    InvitationService,
    PlaybackSyncService,
    SessionLifecycleService,
    UserService,
)
from listen.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_invite_friend_use_case(
        self, invitation_service: InvitationService
    ) -> InviteFriendUseCase:
        """Provide invite friend use case."""
        return InviteFriendUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_incoming_invitations_use_case(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> ListIncomingInvitationsUseCase:
        """Provide list incoming invitations use case."""
        return ListIncomingInvitationsUseCase(
            invitation_service=invitation_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_outgoing_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ListOutgoingInvitationsUseCase:
        """Provide list outgoing invitations use case."""
        return ListOutgoingInvitationsUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_decline_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> DeclineInvitationUseCase:
        """Provide decline invitation use case."""
        return DeclineInvitationUseCase(invitation_service=invitation_service)

    # Friend use cases
    @provide(scope=Scope.REQUEST)
    def get_list_friends_use_case(self, user_service: UserService) -> ListFriendsUseCase:
        """Provide list friends use case."""
        return ListFriendsUseCase(user_service=user_service)

    # Session use cases
    @provide(scope=Scope.REQUEST)
    def get_get_active_session_use_case(
        self, lifecycle_service: SessionLifecycleService
    ) -> GetActiveSessionUseCase:
        """Provide get active session use case."""
        return GetActiveSessionUseCase(lifecycle_service=lifecycle_service)

    @provide(scope=Scope.REQUEST)
    def get_get_session_use_case(
        self, lifecycle_service: SessionLifecycleService
    ) -> GetSessionUseCase:
        """Provide get session use case."""
        return GetSessionUseCase(lifecycle_service=lifecycle_service)

    @provide(scope=Scope.REQUEST)
    def get_leave_session_use_case(
        self, lifecycle_service: SessionLifecycleService
    ) -> LeaveSessionUseCase:
        """Provide leave session use case."""
        return LeaveSessionUseCase(lifecycle_service=lifecycle_service)

    @provide(scope=Scope.REQUEST)
    def get_end_session_use_case(
        self, lifecycle_service: SessionLifecycleService
    ) -> EndSessionUseCase:
        """Provide end session use case."""
        return EndSessionUseCase(lifecycle_service=lifecycle_service)

    # Playback use cases
    @provide(scope=Scope.REQUEST)
    def get_sync_playback_use_case(
        self, playback_service: PlaybackSyncService
    ) -> SyncPlaybackUseCase:
        """Provide sync playback use case."""
        return SyncPlaybackUseCase(playback_service=playback_service)

    @provide(scope=Scope.REQUEST)
    def get_read_playback_state_use_case(
        self, playback_service: PlaybackSyncService
    ) -> ReadPlaybackStateUseCase:
        """Provide read playback state use case."""
        return ReadPlaybackStateUseCase(playback_service=playback_service)
