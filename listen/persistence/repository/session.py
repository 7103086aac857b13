"""PostgreSQL implementation of ListenSession repository."""

from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from listen.domain.model import ListenSession
from listen.domain.repository import SessionRepository
from listen.domain.value import SessionId, UserId
from listen.persistence.mappers import row_to_session, session_to_dict
from listen.persistence.tables import listen_sessions_table


class PostgresSessionRepository(SessionRepository):
    """PostgreSQL implementation of SessionRepository.

    A save overwrites the whole row, so the last writer wins.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, session_id: SessionId) -> Optional[ListenSession]:
        """Find a session by ID.

        Args:
            session_id: Session ID to look up

        Returns:
            Session if found, None otherwise
        """
        stmt = select(listen_sessions_table).where(
            listen_sessions_table.c.id == session_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_session(dict(row)) if row else None

    async def save(self, session: ListenSession) -> ListenSession:
        """Save a session (create or update).

        Args:
            session: Session to save

        Returns:
            Saved session
        """
        session_dict = session_to_dict(session)

        existing = await self.find_by_id(session.id)

        if existing:
            stmt = (
                update(listen_sessions_table)
                .where(listen_sessions_table.c.id == session.id)
                .values(**session_dict)
            )
        else:
            stmt = insert(listen_sessions_table).values(**session_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return session

    async def find_active_by_host(self, host_id: UserId) -> list[ListenSession]:
        """Find active sessions hosted by a user, newest first.

        Served by idx_listen_sessions_host_active.
        """
        stmt = (
            select(listen_sessions_table)
            .where(
                and_(
                    listen_sessions_table.c.host_id == host_id,
                    listen_sessions_table.c.is_active.is_(True),
                )
            )
            .order_by(listen_sessions_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_session(dict(row)) for row in result.mappings().all()]

    async def find_active_by_participant(self, user_id: UserId) -> list[ListenSession]:
        """Find active sessions a user participates in, newest first.

        Array containment is served by the GIN index on participant_ids.
        """
        stmt = (
            select(listen_sessions_table)
            .where(
                and_(
                    listen_sessions_table.c.participant_ids.contains([user_id]),
                    listen_sessions_table.c.is_active.is_(True),
                )
            )
            .order_by(listen_sessions_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_session(dict(row)) for row in result.mappings().all()]
