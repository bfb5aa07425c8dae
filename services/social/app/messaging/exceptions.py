"""
Messaging domain exceptions.
"""
from __future__ import annotations

from app.exceptions import PrivacyError, ValidationError


class MessagingNotAllowed(PrivacyError):
    code = "messaging_not_allowed"
    message = "This profile is private. You must be friends to message this user."


class EmptyMessage(ValidationError):
    code = "empty_message"
    message = "Message content cannot be empty."
