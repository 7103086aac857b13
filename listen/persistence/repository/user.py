"""PostgreSQL implementation of the user directory."""

from typing import Iterable, Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from listen.domain.model import User
from listen.domain.repository import UserRepository
from listen.domain.value import InvitationId, SessionId, UserId
from listen.persistence.mappers import row_to_user, user_to_dict
from listen.persistence.tables import friendships_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID, with the friend set loaded.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return row_to_user(dict(row), await self._friend_ids(user_id))

    async def find_friends(self, user_id: UserId) -> list[User]:
        """Find the users in a user's friend set.

        Args:
            user_id: User whose friends to load

        Returns:
            Friends, each with their own friend set loaded
        """
        stmt = (
            select(users_table)
            .select_from(
                users_table.join(
                    friendships_table,
                    users_table.c.id == friendships_table.c.friend_id,
                )
            )
            .where(friendships_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [
            row_to_user(dict(row), await self._friend_ids(row["id"])) for row in rows
        ]

    async def is_friend(self, user_id: UserId, other_id: UserId) -> bool:
        """Check whether ``other_id`` is in ``user_id``'s friend set."""
        stmt = select(friendships_table.c.user_id).where(
            and_(
                friendships_table.c.user_id == user_id,
                friendships_table.c.friend_id == other_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def save(self, user: User) -> User:
        """Save a user (create or update), replacing its friend set.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                update(users_table).where(users_table.c.id == user.id).values(**user_dict)
            )
            await self.session.execute(stmt)
            await self.session.execute(
                delete(friendships_table).where(friendships_table.c.user_id == user.id)
            )
        else:
            stmt = insert(users_table).values(**user_dict)
            await self.session.execute(stmt)

        if user.friend_ids:
            await self.session.execute(
                insert(friendships_table),
                [
                    {"user_id": user.id, "friend_id": friend_id}
                    for friend_id in sorted(user.friend_ids)
                ],
            )

        await self.session.flush()
        return user

    async def set_active_session(
        self, user_id: UserId, session_id: SessionId | None
    ) -> Optional[User]:
        """Point a user at a session, or clear the pointer with None."""
        return await self._update_returning(
            user_id, active_session_id=session_id
        )

    async def clear_active_session(
        self, user_ids: Iterable[UserId], session_id: SessionId
    ) -> int:
        """Clear the pointers of ``user_ids`` that still reference ``session_id``.

        Single conditional UPDATE, so a pointer moved to another session in
        the meantime is left alone.
        """
        ids = list(user_ids)
        if not ids:
            return 0
        stmt = (
            update(users_table)
            .where(
                and_(
                    users_table.c.id.in_(ids),
                    users_table.c.active_session_id == session_id,
                )
            )
            .values(active_session_id=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def add_pending_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> Optional[User]:
        """Append an inbound invitation ID unless already present."""
        column = users_table.c.pending_invitation_ids
        return await self._update_returning(
            user_id,
            pending_invitation_ids=func.array_append(
                func.array_remove(column, invitation_id), invitation_id
            ),
        )

    async def remove_pending_invitation(
        self, user_id: UserId, invitation_id: InvitationId
    ) -> Optional[User]:
        """Remove an inbound invitation ID (no-op when absent)."""
        column = users_table.c.pending_invitation_ids
        return await self._update_returning(
            user_id, pending_invitation_ids=func.array_remove(column, invitation_id)
        )

    async def _update_returning(self, user_id: UserId, **values) -> Optional[User]:
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(**values)
            .returning(users_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        if not row:
            return None
        return row_to_user(dict(row), await self._friend_ids(user_id))

    async def _friend_ids(self, user_id: UserId) -> list[UserId]:
        stmt = select(friendships_table.c.friend_id).where(
            friendships_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return [UserId(friend_id) for friend_id in result.scalars().all()]
