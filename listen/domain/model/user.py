"""User entity as seen through the user directory.

Identity and the friend graph are managed elsewhere; this service reads the
friend set and owns only the active-session pointer and the inbound
invitation back-references.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from listen.domain.model.common import DomainModel, utcnow
from listen.domain.value import Handle, InvitationId, SessionId, UserId


class User(DomainModel):
    """User entity.

    ``active_session_id`` is a cached pointer, not ownership: the session it
    references may have ended, so readers revalidate it against the session.
    """

    id: UserId
    handle: Handle
    friend_ids: frozenset[UserId] = frozenset()
    active_session_id: Optional[SessionId] = None
    pending_invitation_ids: frozenset[InvitationId] = frozenset()
    created_at: datetime = Field(default_factory=utcnow)

    def is_friend_of(self, other_id: UserId) -> bool:
        return other_id in self.friend_ids
