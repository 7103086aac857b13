#!/usr/bin/env python3
"""Delete invitation records past their deadline.

Housekeeping only: expired invitations already read as expired everywhere,
so this can run on any schedule (or not at all) without changing behavior.
"""

import asyncio
import sys

import logfire

from listen.config import Settings
from listen.domain.service import (
    InvitationService,
    SessionLifecycleService,
    SessionService,
)
from listen.persistence.database import (
    create_engine,
    create_session_factory,
    get_session,
)
from listen.persistence.repository import (
    PostgresInvitationRepository,
    PostgresSessionRepository,
    PostgresUserRepository,
)
from listen.util.observability import configure_logfire


async def purge(settings: Settings) -> int:
    """Run one purge in its own transaction.

    Returns:
        Number of invitations removed
    """
    engine = create_engine(settings)
    try:
        async with get_session(create_session_factory(engine)) as session:
            user_repository = PostgresUserRepository(session)
            invitation_service = InvitationService(
                invitation_repository=PostgresInvitationRepository(session),
                user_repository=user_repository,
                lifecycle_service=SessionLifecycleService(
                    session_service=SessionService(PostgresSessionRepository(session)),
                    user_repository=user_repository,
                ),
                invitation_ttl=settings.listening.invitation_ttl,
            )
            removed = await invitation_service.purge_expired()
            await session.commit()
            return removed
    finally:
        await engine.dispose()


def main() -> int:
    """Purge expired invitations and log any errors to Logfire."""
    settings = Settings()

    configure_logfire(settings)

    try:
        removed = asyncio.run(purge(settings))
        logfire.info("Invitation purge completed", removed=removed)
        return 0

    except Exception as e:
        logfire.error(
            "Invitation purge failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
