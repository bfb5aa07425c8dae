"""
Social service — domain error kinds.

Service modules raise subclasses of DomainError and never import FastAPI.
Each domain package defines its own specific errors (``<domain>/exceptions.py``)
on top of the kinds below; main.py registers ``domain_error_handler`` which
turns the kind into a status code and the standard error envelope.
"""
from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse

from shared.middleware.error_handler import error_response


class DomainError(Exception):
    """Expected, caller-recoverable failure."""

    code: str = "domain_error"
    message: str = "The request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


class NotFoundError(DomainError):
    code = "not_found"
    message = "Resource not found."


class SelfReferenceError(DomainError):
    code = "self_reference"
    message = "This action cannot target yourself."


class DuplicateError(DomainError):
    code = "duplicate"
    message = "Resource already exists."


class PrivacyError(DomainError):
    code = "private_profile"
    message = "This profile is private."


class InvalidStateError(DomainError):
    code = "invalid_state"
    message = "The resource is not in a state that allows this action."


class ValidationError(DomainError):
    code = "validation_error"
    message = "Invalid input."


class AuthenticationError(DomainError):
    code = "authentication_failed"
    message = "Authentication failed."


class ForbiddenError(DomainError):
    code = "forbidden"
    message = "You do not have permission to perform this action."


class ExternalServiceError(DomainError):
    code = "upstream_unavailable"
    message = "An upstream service is unavailable. Try again later."


# Most specific kind first: lookup walks the MRO of the raised error.
_STATUS_BY_KIND: dict[type[DomainError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    SelfReferenceError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DuplicateError: status.HTTP_409_CONFLICT,
    PrivacyError: status.HTTP_403_FORBIDDEN,
    InvalidStateError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ExternalServiceError: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: DomainError) -> int:
    for kind in type(exc).__mro__:
        if kind in _STATUS_BY_KIND:
            return _STATUS_BY_KIND[kind]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return error_response(request, status_for(exc), exc.code, exc.message)
