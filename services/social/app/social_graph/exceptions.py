"""
Social graph domain exceptions.

Raised by service.py; mapped to status codes by app.exceptions.domain_error_handler.
"""
from __future__ import annotations

from app.exceptions import (
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    PrivacyError,
    SelfReferenceError,
    ValidationError,
)


class CannotFollowSelf(SelfReferenceError):
    code = "cannot_follow_self"
    message = "You cannot follow yourself."


class AlreadyFollowing(DuplicateError):
    code = "already_following"
    message = "You already follow this user."


class NotFollowing(NotFoundError):
    code = "not_following"
    message = "You do not follow this user."


class PrivateProfileFollow(PrivacyError):
    message = "This profile is private. Send a friend request instead."


class CannotFriendSelf(SelfReferenceError):
    code = "cannot_friend_self"
    message = "You cannot send a friend request to yourself."


class FriendRequestAlreadySent(DuplicateError):
    code = "friend_request_pending"
    message = "A friend request to this user is already pending."


class FriendRequestAlreadyReceived(DuplicateError):
    code = "friend_request_received"
    message = "This user has already sent you a friend request. Respond to it instead."


class FriendRequestNotFound(NotFoundError):
    code = "friend_request_not_found"
    message = "Friend request not found."


class FriendRequestNotPending(InvalidStateError):
    code = "friend_request_not_pending"
    message = "This friend request has already been answered."


class InvalidFriendRequestAction(ValidationError):
    code = "invalid_action"
    message = "Action must be 'accept' or 'decline'."
