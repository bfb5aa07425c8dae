"""Profile domain errors."""
from app.exceptions import ValidationError


class SearchQueryTooShort(ValidationError):
    code = "query_too_short"
    message = "Search query must be at least 2 characters."


class UsernameRequired(ValidationError):
    message = "Username cannot be empty."
