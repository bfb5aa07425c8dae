"""Auth domain errors."""
from app.exceptions import (
    AuthenticationError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)


class EmailAlreadyRegistered(DuplicateError):
    message = "A user with this email already exists."


class UsernameTaken(DuplicateError):
    message = "This username is already taken."


class InvalidUsername(ValidationError):
    message = "Invalid username (3-20 characters: lowercase letters, digits or _)."


class InvalidCredentials(AuthenticationError):
    message = "Invalid email or password."


class AccountNotVerified(ForbiddenError):
    code = "account_not_verified"
    message = "Account not verified. Check your email for the verification code."


class InvalidVerificationCode(ValidationError):
    code = "invalid_code"
    message = "Invalid or expired verification code."


class UserNotFound(NotFoundError):
    message = "User not found."
