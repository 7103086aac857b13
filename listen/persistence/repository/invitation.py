"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from listen.domain.model import Invitation
from listen.domain.repository import InvitationRepository
from listen.domain.value import InvitationId, InvitationStatus, UserId
from listen.persistence.mappers import invitation_to_dict, row_to_invitation
from listen.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID.

        Args:
            invitation_id: Invitation ID to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_recipient(
        self, to_user_id: UserId, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        """Find invitations addressed to a user, newest first.

        Served by idx_invitations_to_status.
        """
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.to_user_id == to_user_id)
            .order_by(invitations_table.c.created_at.desc())
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def find_by_sender(
        self, from_user_id: UserId, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        """Find invitations sent by a user, newest first.

        Served by idx_invitations_from_status.
        """
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.from_user_id == from_user_id)
            .order_by(invitations_table.c.created_at.desc())
        )
        if status:
            stmt = stmt.where(invitations_table.c.status == status.value)

        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def find_pending_between(
        self, from_user_id: UserId, to_user_id: UserId
    ) -> Optional[Invitation]:
        """Find the stored-pending invitation from one user to another.

        Args:
            from_user_id: Sender ID
            to_user_id: Recipient ID

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.from_user_id == from_user_id,
                invitations_table.c.to_user_id == to_user_id,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: Invitation to save

        Returns:
            Saved invitation

        Raises:
            IntegrityError: If the unique pending-pair index rejects the insert
        """
        invitation_dict = invitation_to_dict(invitation)

        existing = await self.find_by_id(invitation.id)

        if existing:
            stmt = (
                update(invitations_table)
                .where(invitations_table.c.id == invitation.id)
                .values(**invitation_dict)
            )
            await self.session.execute(stmt)
        else:
            # Savepoint so a rejected duplicate leaves the transaction usable
            async with self.session.begin_nested():
                stmt = insert(invitations_table).values(**invitation_dict)
                await self.session.execute(stmt)

        await self.session.flush()
        return invitation

    async def delete_expired(self, before: datetime) -> list[Invitation]:
        """Delete invitations whose deadline passed before ``before``.

        Args:
            before: Cut-off time

        Returns:
            The deleted invitations
        """
        stmt = (
            delete(invitations_table)
            .where(invitations_table.c.expires_at < before)
            .returning(invitations_table)
        )
        result = await self.session.execute(stmt)
        removed = [row_to_invitation(dict(row)) for row in result.mappings().all()]
        await self.session.flush()
        return removed
