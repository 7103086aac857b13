"""Invitation ledger domain service."""

from datetime import timedelta

import logfire
from sqlalchemy.exc import IntegrityError

from listen.domain.error import (
    DuplicatePendingError,
    ExpiredError,
    ForbiddenError,
    FriendshipRequiredError,
    InvalidStateError,
    NotFoundError,
    SelfInviteError,
)
from listen.domain.model import INVITATION_TTL, Invitation, ListenSession
from listen.domain.model.common import utcnow
from listen.domain.repository import InvitationRepository, UserRepository
from listen.domain.value import InvitationId, InvitationStatus, UserId

from .base import Service
from .lifecycle_service import SessionLifecycleService


class InvitationService(Service):
    """Domain service for the listen-together invitation handshake.

    Expiry is a passive fact: an invitation past its deadline is treated as
    expired by every read here, however late the housekeeping purge runs.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        user_repository: UserRepository,
        lifecycle_service: SessionLifecycleService,
        invitation_ttl: timedelta = INVITATION_TTL,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            user_repository: User directory
            lifecycle_service: Session lifecycle service, which accepted
                invitations hand over to
            invitation_ttl: How long a new invitation stays open
        """
        self.invitation_repository = invitation_repository
        self.user_repository = user_repository
        self.lifecycle_service = lifecycle_service
        self.invitation_ttl = invitation_ttl

    async def create_invitation(
        self, from_user_id: UserId, to_user_id: UserId
    ) -> Invitation:
        """Invite a friend to listen together.

        Args:
            from_user_id: Inviter
            to_user_id: Invitee

        Returns:
            The pending invitation

        Raises:
            SelfInviteError: If inviting oneself
            NotFoundError: If either user does not exist
            FriendshipRequiredError: If the invitee is not a friend
            DuplicatePendingError: If a live pending invitation already exists
        """
        with logfire.span(
            "invitation_service.create_invitation",
            from_user_id=str(from_user_id),
            to_user_id=str(to_user_id),
        ):
            if from_user_id == to_user_id:
                raise SelfInviteError()

            for user_id in (from_user_id, to_user_id):
                if not await self.user_repository.find_by_id(user_id):
                    raise NotFoundError("User", str(user_id))

            if not await self.user_repository.is_friend(from_user_id, to_user_id):
                logfire.warn(
                    "Invitation to non-friend",
                    from_user_id=str(from_user_id),
                    to_user_id=str(to_user_id),
                )
                raise FriendshipRequiredError()

            now = utcnow()
            existing = await self.invitation_repository.find_pending_between(
                from_user_id, to_user_id
            )
            if existing:
                if not existing.is_overdue(now):
                    logfire.warn(
                        "Invitation already pending", invitation_id=str(existing.id)
                    )
                    raise DuplicatePendingError()
                await self._mark_expired(existing)

            invitation = Invitation.create(
                from_user_id, to_user_id, now, ttl=self.invitation_ttl
            )
            try:
                saved = await self.invitation_repository.save(invitation)
            except IntegrityError:
                logfire.warn(
                    "Concurrent duplicate invitation",
                    from_user_id=str(from_user_id),
                    to_user_id=str(to_user_id),
                )
                raise DuplicatePendingError()

            await self.user_repository.add_pending_invitation(to_user_id, saved.id)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                from_user_id=str(from_user_id),
                to_user_id=str(to_user_id),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def list_pending(self, user_id: UserId) -> list[Invitation]:
        """List live invitations addressed to a user, newest first.

        Args:
            user_id: Recipient

        Returns:
            Pending invitations whose deadline has not passed
        """
        with logfire.span("invitation_service.list_pending", user_id=str(user_id)):
            now = utcnow()
            invitations = await self.invitation_repository.find_by_recipient(
                user_id, InvitationStatus.PENDING
            )
            live = [inv for inv in invitations if inv.is_live(now)]
            logfire.info(
                "Pending invitations listed",
                user_id=str(user_id),
                count=len(live),
                skipped_expired=len(invitations) - len(live),
            )
            return live

    async def list_outgoing(self, user_id: UserId) -> list[Invitation]:
        """List live invitations a user has sent, newest first."""
        now = utcnow()
        invitations = await self.invitation_repository.find_by_sender(
            user_id, InvitationStatus.PENDING
        )
        return [inv for inv in invitations if inv.is_live(now)]

    async def accept(
        self, invitation_id: InvitationId, acting_user_id: UserId
    ) -> tuple[Invitation, ListenSession]:
        """Accept an invitation and start the shared session.

        Args:
            invitation_id: Invitation to accept
            acting_user_id: Caller, who must be the recipient

        Returns:
            The accepted invitation and the new session

        Raises:
            NotFoundError: If the invitation does not exist
            ForbiddenError: If the caller is not the recipient
            InvalidStateError: If the invitation is no longer pending
            ExpiredError: If the deadline has passed (the expiry is persisted)
        """
        with logfire.span(
            "invitation_service.accept",
            invitation_id=str(invitation_id),
            acting_user_id=str(acting_user_id),
        ):
            invitation = await self._get_addressed(invitation_id, acting_user_id)

            if invitation.status is not InvitationStatus.PENDING:
                raise InvalidStateError("Invitation is no longer pending")

            if invitation.is_overdue(utcnow()):
                await self._mark_expired(invitation)
                raise ExpiredError("Invitation has expired")

            session = await self.lifecycle_service.start_session(
                invitation.from_user_id, invitation.to_user_id
            )

            accepted = await self.invitation_repository.save(
                invitation.accept(session.id)
            )
            await self.user_repository.remove_pending_invitation(
                acting_user_id, invitation_id
            )
            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation_id),
                session_id=str(session.id),
            )
            return accepted, session

    async def decline(
        self, invitation_id: InvitationId, acting_user_id: UserId
    ) -> Invitation:
        """Decline an invitation.

        Declining an expired or already declined invitation is a harmless
        no-op.

        Args:
            invitation_id: Invitation to decline
            acting_user_id: Caller, who must be the recipient

        Returns:
            The invitation after declining

        Raises:
            NotFoundError: If the invitation does not exist
            ForbiddenError: If the caller is not the recipient
            InvalidStateError: If the invitation was already accepted
        """
        with logfire.span(
            "invitation_service.decline",
            invitation_id=str(invitation_id),
            acting_user_id=str(acting_user_id),
        ):
            invitation = await self._get_addressed(invitation_id, acting_user_id)

            if invitation.status is InvitationStatus.ACCEPTED:
                raise InvalidStateError("Invitation was already accepted")

            if invitation.status is InvitationStatus.PENDING:
                invitation = await self.invitation_repository.save(
                    invitation.decline()
                )
                logfire.info("Invitation declined", invitation_id=str(invitation_id))

            await self.user_repository.remove_pending_invitation(
                acting_user_id, invitation_id
            )
            return invitation

    async def purge_expired(self) -> int:
        """Delete invitation records whose deadline has passed.

        Housekeeping only; safe to run at any time or not at all.

        Returns:
            Number of records removed
        """
        with logfire.span("invitation_service.purge_expired"):
            removed = await self.invitation_repository.delete_expired(utcnow())
            for invitation in removed:
                await self.user_repository.remove_pending_invitation(
                    invitation.to_user_id, invitation.id
                )
            logfire.info("Expired invitations purged", count=len(removed))
            return len(removed)

    async def _get_addressed(
        self, invitation_id: InvitationId, acting_user_id: UserId
    ) -> Invitation:
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if not invitation:
            raise NotFoundError("Invitation", str(invitation_id))
        if invitation.to_user_id != acting_user_id:
            logfire.warn(
                "Invitation acted on by someone other than the recipient",
                invitation_id=str(invitation_id),
                acting_user_id=str(acting_user_id),
            )
            raise ForbiddenError("Only the recipient can respond to this invitation")
        return invitation

    async def _mark_expired(self, invitation: Invitation) -> Invitation:
        expired = await self.invitation_repository.save(invitation.expire())
        await self.user_repository.remove_pending_invitation(
            invitation.to_user_id, invitation.id
        )
        logfire.info("Invitation expired", invitation_id=str(invitation.id))
        return expired
