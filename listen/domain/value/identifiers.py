"""Strongly typed identifiers for listen-together entities.

NewType keeps user, invitation and session ids from being mixed up
while staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
InvitationId = NewType("InvitationId", UUID)
SessionId = NewType("SessionId", UUID)
