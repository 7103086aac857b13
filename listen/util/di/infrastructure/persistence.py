"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from listen.config import Settings
from listen.domain.repository import (
    InvitationRepository,
    SessionRepository,
    UserRepository,
)
from listen.persistence.database import (
    TransactionOutcome,
    create_engine,
    create_session_factory,
)
from listen.persistence.repository import (
    PostgresInvitationRepository,
    PostgresSessionRepository,
    PostgresUserRepository,
)
from listen.util.di.base import ProviderBase
from listen.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        outcome: TransactionOutcome,
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        One transaction per request. It is committed at the end of the request
        unless an exception escaped or an error handler discarded the
        request's writes through ``TransactionOutcome``; then it is rolled back.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise
            if outcome.discard_writes:
                await session.rollback()
                logfire.info("Session rolled back after handled error")
            else:
                await session.commit()
                logfire.info("Session committed")

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide user directory."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        """Provide Invitation repository."""
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_session_repository(self, session: AsyncSession) -> SessionRepository:
        """Provide ListenSession repository."""
        return PostgresSessionRepository(session)
