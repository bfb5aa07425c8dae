"""
Posts domain exceptions.
"""
from __future__ import annotations

from app.exceptions import DuplicateError, NotFoundError, ValidationError


class PostNotFound(NotFoundError):
    code = "post_not_found"
    message = "Post not found."


class AlreadyLiked(DuplicateError):
    code = "already_liked"
    message = "You already liked this post."


class EmptyContent(ValidationError):
    code = "empty_content"
    message = "Content cannot be empty."
