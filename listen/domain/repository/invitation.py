"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from listen.domain.model.invitation import Invitation
from listen.domain.value import InvitationId, InvitationStatus, UserId


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_recipient(
        self, to_user_id: UserId, status: InvitationStatus | None = None
    ) -> list[Invitation]:
        """Find invitations addressed to a user, newest first.

        Args:
            to_user_id: The recipient's ID
            status: Optional stored-status filter

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def find_by_sender(
        self, from_user_id: UserId, status: InvitationStatus | None = None
    ) -> list[Invitation]:
        """Find invitations sent by a user, newest first.

        Args:
            from_user_id: The sender's ID
            status: Optional stored-status filter

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def find_pending_between(
        self, from_user_id: UserId, to_user_id: UserId
    ) -> Invitation | None:
        """Find the stored-pending invitation from one user to another.

        Used during invitation creation to prevent duplicates.

        Args:
            from_user_id: The sender's ID
            to_user_id: The recipient's ID

        Returns:
            The pending invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation

        Raises:
            IntegrityError: If a second pending invitation between the same
                users would be created
        """
        pass

    @abstractmethod
    async def delete_expired(self, before: datetime) -> list[Invitation]:
        """Physically remove invitations whose deadline is before ``before``.

        Store-level housekeeping; business logic never relies on it.

        Args:
            before: Cut-off time

        Returns:
            The removed invitations
        """
        pass
