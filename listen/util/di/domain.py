"""Domain layer DI providers."""

from dishka import Scope, provide

from listen.config import AuthSettings, ListeningSettings
from listen.domain.repository import (
    InvitationRepository,
    SessionRepository,
    UserRepository,
)
from listen.domain.service import (
    InvitationService,
    JWTService,
    PlaybackSyncService,
    SessionLifecycleService,
    SessionService,
    UserService,
)
from listen.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_session_service(
        self, session_repository: SessionRepository
    ) -> SessionService:
        """Provide session store domain service."""
        return SessionService(session_repository=session_repository)

    @provide
    def get_lifecycle_service(
        self, session_service: SessionService, user_repository: UserRepository
    ) -> SessionLifecycleService:
        """Provide session lifecycle domain service."""
        return SessionLifecycleService(
            session_service=session_service, user_repository=user_repository
        )

    @provide
    def get_playback_service(
        self, session_service: SessionService
    ) -> PlaybackSyncService:
        """Provide playback sync domain service."""
        return PlaybackSyncService(session_service=session_service)

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        user_repository: UserRepository,
        lifecycle_service: SessionLifecycleService,
        listening_settings: ListeningSettings,
    ) -> InvitationService:
        """Provide invitation ledger domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            user_repository=user_repository,
            lifecycle_service=lifecycle_service,
            invitation_ttl=listening_settings.invitation_ttl,
        )
