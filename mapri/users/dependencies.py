from __future__ import annotations

from fastapi import HTTPException, Request

from .models import User


def get_current_user(request: Request) -> User | None:
    """Return the profile stored in the session, or ``None``."""
    raw = request.session.get("user")
    return User.model_validate(raw) if raw else None


def require_user(request: Request) -> User:
    """Raise 401 if no profile was chosen."""
    user = get_current_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail="No profile selected")
    return user
