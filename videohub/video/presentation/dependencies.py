"""
Request dependencies for the video routes.

The authenticated actor is resolved upstream and placed on
``request.state.user``; these helpers only read it.
"""

from typing import Any, Optional

from fastapi import Depends, Request

from ...core.errors import AuthenticationError


def _user_id(user: Any) -> Optional[str]:
    if user is None:
        return None
    if isinstance(user, dict):
        value = user.get("_id") or user.get("id")
    else:
        value = getattr(user, "id", None)
    return str(value) if value else None


def get_current_actor(request: Request) -> Optional[str]:
    """Authenticated actor id, or None for anonymous callers"""
    return _user_id(getattr(request.state, "user", None))


def require_actor(actor_id: Optional[str] = Depends(get_current_actor)) -> str:
    """Authenticated actor id; 401 when the request is anonymous"""
    if not actor_id:
        raise AuthenticationError("Unauthorized request")
    return actor_id
