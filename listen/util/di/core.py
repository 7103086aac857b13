"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from listen.config import AuthSettings, ListeningSettings, Settings
from listen.persistence.database import TransactionOutcome
from listen.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_listening_settings(self, settings: Settings) -> ListeningSettings:
        """Provide listen-together settings."""
        return settings.listening


class ProdRequestProvider(ProviderBase):
    """Per-request bookkeeping shared by the API layer and persistence."""

    @provide(scope=Scope.REQUEST)
    def provide_transaction_outcome(self) -> TransactionOutcome:
        """Provide a fresh commit/rollback verdict for the request."""
        return TransactionOutcome()
