"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from listen.domain.model.invitation import Invitation
from listen.domain.repository.invitation import InvitationRepository
from listen.domain.value import InvitationId, InvitationStatus, UserId


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        return self._invitations.get(invitation_id)

    async def find_by_recipient(
        self, to_user_id: UserId, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        """Find invitations addressed to a user, newest first."""
        return self._matching(
            lambda inv: inv.to_user_id == to_user_id
            and (status is None or inv.status == status)
        )

    async def find_by_sender(
        self, from_user_id: UserId, status: Optional[InvitationStatus] = None
    ) -> list[Invitation]:
        """Find invitations sent by a user, newest first."""
        return self._matching(
            lambda inv: inv.from_user_id == from_user_id
            and (status is None or inv.status == status)
        )

    async def find_pending_between(
        self, from_user_id: UserId, to_user_id: UserId
    ) -> Optional[Invitation]:
        """Find the stored-pending invitation from one user to another."""
        for invitation in self._invitations.values():
            if (
                invitation.from_user_id == from_user_id
                and invitation.to_user_id == to_user_id
                and invitation.status == InvitationStatus.PENDING
            ):
                return invitation
        return None

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            IntegrityError: If another pending invitation exists for the same pair
        """
        if invitation.status == InvitationStatus.PENDING:
            existing_pending = await self.find_pending_between(
                invitation.from_user_id, invitation.to_user_id
            )
            if existing_pending and existing_pending.id != invitation.id:
                raise IntegrityError("Duplicate pending invitation", None, Exception())

        self._invitations[invitation.id] = invitation
        return invitation

    async def delete_expired(self, before: datetime) -> list[Invitation]:
        """Delete invitations whose deadline passed before ``before``."""
        removed = [
            inv for inv in self._invitations.values() if inv.expires_at < before
        ]
        for invitation in removed:
            del self._invitations[invitation.id]
        return removed

    def _matching(self, predicate) -> list[Invitation]:
        matches = [inv for inv in self._invitations.values() if predicate(inv)]
        matches.sort(key=lambda inv: inv.created_at, reverse=True)
        return matches
