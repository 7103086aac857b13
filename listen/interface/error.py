"""Interface layer error handling.

Maps domain error kinds to HTTP responses of the form
``{"kind": ..., "detail": ...}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from listen.domain.error import DomainError, ErrorKind
from listen.persistence.database import TransactionOutcome

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorKind.EXPIRED: status.HTTP_410_GONE,
    ErrorKind.SELF_INVITE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FRIENDSHIP_REQUIRED: status.HTTP_403_FORBIDDEN,
    ErrorKind.DUPLICATE_PENDING: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION: 422,  # Unprocessable content
    ErrorKind.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.MEMBERSHIP_INCOMPLETE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(
    kind: ErrorKind, detail: str, status_code: int | None = None, **extra
) -> JSONResponse:
    """Build the JSON error body for a kind."""
    return JSONResponse(
        status_code=status_code or STATUS_BY_KIND[kind],
        content={"kind": kind.value, "detail": detail, **extra},
    )


async def discard_writes(request: Request) -> None:
    """Mark the request's transaction for rollback."""
    container = getattr(request.state, "dishka_container", None)
    if container is not None:
        outcome = await container.get(TransactionOutcome)
        outcome.discard()


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a domain error, discarding the request's writes unless kept."""
    if not exc.preserves_writes:
        await discard_writes(request)

    status_code = STATUS_BY_KIND[exc.kind]
    if status_code >= 500:
        logfire.error(
            "Request failed",
            kind=exc.kind.value,
            error=exc.message,
            path=request.url.path,
        )
    else:
        logfire.info(
            "Request rejected",
            kind=exc.kind.value,
            error=exc.message,
            path=request.url.path,
        )
    return error_response(exc.kind, exc.message, status_code)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed path, header or body fields as a Validation error."""
    await discard_writes(request)
    # Rejected input is not echoed back; it may not be JSON-encodable (inf, nan)
    errors = jsonable_encoder(
        [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    )
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in errors
    )
    return error_response(ErrorKind.VALIDATION, detail, errors=errors)


async def handle_database_error(request: Request, exc: DBAPIError) -> JSONResponse:
    """Report a failing store as Unavailable."""
    await discard_writes(request)
    logfire.error(
        "Record store unavailable",
        error=str(exc.orig) if exc.orig else str(exc),
        path=request.url.path,
    )
    return error_response(ErrorKind.UNAVAILABLE, "Record store unavailable")


def register_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers on the app.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(DBAPIError, handle_database_error)
