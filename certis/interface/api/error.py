"""Translate domain errors into HTTP responses."""

import logfire
from fastapi import Request, status
from fastapi.responses import JSONResponse

from certis.domain.error import (
    ConcurrencyConflictError,
    ConflictError,
    DomainError,
    EmailMismatchError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvitationExpiredError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)

# Looked up along the exception's MRO, so subclasses may override their base
STATUS_CODES: dict[type[DomainError], int] = {
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    EmailMismatchError: status.HTTP_403_FORBIDDEN,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ConcurrencyConflictError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PreconditionFailedError: status.HTTP_412_PRECONDITION_FAILED,
    InvitationExpiredError: status.HTTP_410_GONE,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error; unknown subclasses become 400."""
    for cls in type(error).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Exception handler registered for every ``DomainError``."""
    status_code = status_code_for(exc)

    logfire.warn(
        "Request rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        status_code=status_code,
    )

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
        headers=headers,
    )
