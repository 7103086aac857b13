"""Session use cases."""

from listen.application.usecase.session.end_session import (
    EndSessionRequest,
    EndSessionResponse,
    EndSessionUseCase,
)
from listen.application.usecase.session.get_active_session import (
    GetActiveSessionRequest,
    GetActiveSessionResponse,
    GetActiveSessionUseCase,
)
from listen.application.usecase.session.get_session import (
    GetSessionRequest,
    GetSessionResponse,
    GetSessionUseCase,
)
from listen.application.usecase.session.leave_session import (
    LeaveSessionRequest,
    LeaveSessionResponse,
    LeaveSessionUseCase,
)

__all__ = [
    "EndSessionRequest",
    "EndSessionResponse",
    "EndSessionUseCase",
    "GetActiveSessionRequest",
    "GetActiveSessionResponse",
    "GetActiveSessionUseCase",
    "GetSessionRequest",
    "GetSessionResponse",
    "GetSessionUseCase",
    "LeaveSessionRequest",
    "LeaveSessionResponse",
    "LeaveSessionUseCase",
]
