"""
Social service — auth-specific FastAPI dependencies.

These wrap the shared auth dependencies so routes import from here, not from
shared directly.
"""
from __future__ import annotations

from shared.auth.dependencies import get_current_user_required

get_current_user = get_current_user_required
