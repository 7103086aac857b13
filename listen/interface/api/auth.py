"""Caller identification for API routes."""

from uuid import UUID

from listen.domain.error import UnauthorizedError
from listen.domain.service import JWTService


def require_user_id(jwt_service: JWTService, auth_token: str | None) -> str:
    """Resolve the authenticated caller from the ``auth_token`` cookie.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie

    Returns:
        The caller's user ID

    Raises:
        UnauthorizedError: If the token is missing, invalid or not for a user ID
    """
    if not auth_token:
        raise UnauthorizedError()

    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise UnauthorizedError("Invalid or expired token")

    try:
        UUID(user_id)
    except ValueError:
        raise UnauthorizedError("Invalid token subject")
    return user_id
