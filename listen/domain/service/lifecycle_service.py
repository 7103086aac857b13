"""Session lifecycle domain service."""

import logfire

from listen.domain.error import ForbiddenError, MembershipIncompleteError, NotFoundError
from listen.domain.model import ListenSession, User
from listen.domain.model.common import utcnow
from listen.domain.repository import UserRepository
from listen.domain.value import SessionId, UserId

from .base import Service
from .session_service import SessionService


class SessionLifecycleService(Service):
    """Domain service for session start, leave, end and active-session lookup.

    This is the only writer of the users' active-session pointers. A user is
    bound to at most one active session; the pointer is a cache that is
    revalidated against the session on every read.
    """

    def __init__(
        self, session_service: SessionService, user_repository: UserRepository
    ) -> None:
        """Initialize lifecycle service.

        Args:
            session_service: Session store service
            user_repository: User directory
        """
        self.session_service = session_service
        self.user_repository = user_repository

    async def start_session(
        self, host_id: UserId, participant_id: UserId
    ) -> ListenSession:
        """Start a session between an inviter (host) and an invitee.

        The caller has already validated the accepted invitation. Any active
        session either user is bound to is ended first, then both pointers
        are moved to the new session, host first.

        Args:
            host_id: Inviter, who becomes the host
            participant_id: Invitee

        Returns:
            The new active session

        Raises:
            NotFoundError: If either user does not exist
            MembershipIncompleteError: If a pointer could not be registered
        """
        with logfire.span(
            "lifecycle_service.start_session",
            host_id=str(host_id),
            participant_id=str(participant_id),
        ):
            host = await self._get_user(host_id)
            participant = await self._get_user(participant_id)
            now = utcnow()

            prior_ids = dict.fromkeys(
                user.active_session_id
                for user in (host, participant)
                if user.active_session_id
            )
            for prior_id in prior_ids:
                prior = await self.session_service.find_by_id(prior_id)
                if prior and prior.is_active:
                    await self.session_service.end_session(prior, now)
                    logfire.info(
                        "Superseded previous session", session_id=str(prior_id)
                    )

            session = await self.session_service.create_session(
                host_id, participant_id, now
            )

            for user_id in (host_id, participant_id):
                updated = await self.user_repository.set_active_session(
                    user_id, session.id
                )
                if updated is None:
                    logfire.error(
                        "Session created but membership registration incomplete",
                        session_id=str(session.id),
                        user_id=str(user_id),
                    )
                    raise MembershipIncompleteError(str(session.id), str(user_id))

            return session

    async def leave(self, session_id: SessionId, user_id: UserId) -> ListenSession:
        """Remove a user from a session.

        The session ends when the host leaves or nobody remains; the
        remaining participants are then released as well. The leaver's own
        pointer is always cleared.

        Args:
            session_id: Session to leave
            user_id: Departing user

        Returns:
            The updated session

        Raises:
            NotFoundError: If session or user not found
        """
        with logfire.span(
            "lifecycle_service.leave", session_id=str(session_id), user_id=str(user_id)
        ):
            session = await self.session_service.get_by_id(session_id)
            await self._get_user(user_id)

            updated = await self.session_service.remove_participant(
                session, user_id, utcnow()
            )
            if not updated.is_active:
                await self._release_participants(updated)

            await self.user_repository.set_active_session(user_id, None)
            return updated

    async def end(self, session_id: SessionId, user_id: UserId) -> ListenSession:
        """End a session on behalf of its host.

        Args:
            session_id: Session to end
            user_id: Caller, who must be the host

        Returns:
            The ended session

        Raises:
            NotFoundError: If session not found
            ForbiddenError: If the caller is not the host
        """
        with logfire.span(
            "lifecycle_service.end", session_id=str(session_id), user_id=str(user_id)
        ):
            session = await self.session_service.get_by_id(session_id)
            if not session.is_host(user_id):
                logfire.warn(
                    "Non-host attempted to end session",
                    session_id=str(session_id),
                    user_id=str(user_id),
                )
                raise ForbiddenError("Only the host can end the session")

            ended = await self.session_service.end_session(session, utcnow())
            await self._release_participants(ended)
            return ended

    async def get_active(self, user_id: UserId) -> ListenSession | None:
        """Resolve a user's active session, repairing a stale pointer.

        A user missing from the directory has no active session.

        Args:
            user_id: User ID

        Returns:
            The active session, or None if the user has none
        """
        with logfire.span("lifecycle_service.get_active", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None or user.active_session_id is None:
                return None

            session = await self.session_service.find_by_id(user.active_session_id)
            if session is None or not session.is_active:
                await self.user_repository.clear_active_session(
                    [user_id], user.active_session_id
                )
                logfire.info(
                    "Cleared stale active-session pointer",
                    user_id=str(user_id),
                    session_id=str(user.active_session_id),
                )
                return None

            return session

    async def get_session(
        self, session_id: SessionId, user_id: UserId
    ) -> ListenSession:
        """Get a session the caller takes part in.

        Raises:
            NotFoundError: If session not found
            ForbiddenError: If the caller is not a participant
        """
        session = await self.session_service.get_by_id(session_id)
        if not session.is_participant(user_id):
            raise ForbiddenError("You are not part of this session")
        return session

    async def _release_participants(self, session: ListenSession) -> None:
        cleared = await self.user_repository.clear_active_session(
            session.participant_ids, session.id
        )
        logfire.info(
            "Participants released", session_id=str(session.id), cleared=cleared
        )

    async def _get_user(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user
