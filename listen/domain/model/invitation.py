"""Invitation entity.

An invitation is a time-bounded offer from one user to a friend to start a
shared listening session.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

from pydantic import Field

from listen.domain.error import InvalidStateError
from listen.domain.model.common import DomainModel, utcnow
from listen.domain.value import InvitationId, InvitationStatus, SessionId, UserId

INVITATION_TTL = timedelta(minutes=10)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one pending invitation from one user to another
    - ``expires_at`` is fixed at creation and never moves
    - A pending invitation past ``expires_at`` reads as expired, whether or
      not the stored status has caught up yet
    - ``session_id`` is set by ``accept`` and never changes afterwards
    """

    id: InvitationId
    from_user_id: UserId
    to_user_id: UserId
    status: InvitationStatus = InvitationStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    session_id: Optional[SessionId] = None

    @classmethod
    def create(
        cls,
        from_user_id: UserId,
        to_user_id: UserId,
        now: datetime,
        ttl: timedelta = INVITATION_TTL,
    ) -> "Invitation":
        """Create a new pending invitation expiring ``ttl`` after ``now``."""
        return cls(
            id=InvitationId(uuid4()),
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            status=InvitationStatus.PENDING,
            created_at=now,
            expires_at=now + ttl,
        )

    def is_overdue(self, now: datetime) -> bool:
        """Whether the deadline has passed while still pending."""
        return self.status is InvitationStatus.PENDING and now > self.expires_at

    def is_live(self, now: datetime) -> bool:
        """Whether the invitation can still be acted upon."""
        return self.status is InvitationStatus.PENDING and self.expires_at > now

    def effective_status(self, now: datetime) -> InvitationStatus:
        """Status as every reader must observe it at ``now``."""
        if self.is_overdue(now):
            return InvitationStatus.EXPIRED
        return self.status

    def accept(self, session_id: SessionId) -> "Invitation":
        return self._transition(InvitationStatus.ACCEPTED, session_id=session_id)

    def decline(self) -> "Invitation":
        return self._transition(InvitationStatus.DECLINED)

    def expire(self) -> "Invitation":
        return self._transition(InvitationStatus.EXPIRED)

    def _transition(self, target: InvitationStatus, **changes) -> "Invitation":
        if not self.status.can_transition_to(target):
            raise InvalidStateError(
                f"Invitation {self.id} is {self.status.value} and can no longer "
                f"become {target.value}"
            )
        return self.model_copy(update={"status": target, **changes})
