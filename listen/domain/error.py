"""Domain layer errors.

Every error carries a stable ``kind`` that the interface layer maps to its
own status convention, plus a human-readable message.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Stable error kinds exposed to callers."""

    UNAUTHORIZED = "Unauthorized"
    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"
    INVALID_STATE = "InvalidState"
    EXPIRED = "Expired"
    SELF_INVITE = "SelfInvite"
    FRIENDSHIP_REQUIRED = "FriendshipRequired"
    DUPLICATE_PENDING = "DuplicatePending"
    VALIDATION = "Validation"
    UNAVAILABLE = "Unavailable"
    MEMBERSHIP_INCOMPLETE = "MembershipIncomplete"


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[ErrorKind]

    # Writes made before the error was raised are kept (committed) when True
    preserves_writes: ClassVar[bool] = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthorizedError(DomainError):
    """Raised when there is no authenticated caller."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the caller is authenticated but not entitled."""

    kind = ErrorKind.FORBIDDEN


class InvalidStateError(DomainError):
    """Raised when an operation is not valid for the current status."""

    kind = ErrorKind.INVALID_STATE


class ExpiredError(DomainError):
    """Raised when an invitation is acted upon past its deadline.

    Discovering the expiry persists the ``expired`` transition, so the
    unit of work is committed even though the operation fails.
    """

    kind = ErrorKind.EXPIRED
    preserves_writes = True


class SelfInviteError(DomainError):
    """Raised when a user invites themselves."""

    kind = ErrorKind.SELF_INVITE

    def __init__(self, message: str = "Cannot send an invitation to yourself"):
        super().__init__(message)


class FriendshipRequiredError(DomainError):
    """Raised when the invitee is not a friend of the inviter."""

    kind = ErrorKind.FRIENDSHIP_REQUIRED

    def __init__(
        self, message: str = "You can only invite friends to listen together"
    ):
        super().__init__(message)


class DuplicatePendingError(DomainError):
    """Raised when a pending invitation between the same users already exists."""

    kind = ErrorKind.DUPLICATE_PENDING

    def __init__(self, message: str = "Invitation already sent"):
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error (malformed input fields)."""

    kind = ErrorKind.VALIDATION


class UnavailableError(DomainError):
    """Raised when the record store cannot be reached in time."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)


class MembershipIncompleteError(DomainError):
    """Session created but membership registration incomplete."""

    kind = ErrorKind.MEMBERSHIP_INCOMPLETE

    def __init__(self, session_id: str, user_id: str):
        self.session_id = session_id
        self.user_id = user_id
        super().__init__(
            f"Session {session_id} created but membership registration "
            f"incomplete for user {user_id}"
        )
