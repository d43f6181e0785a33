"""
Access control helpers.

Authentication is a name/id pairing held by the process-wide
``Session``; there are no passwords or tokens.  Authorization is a
single predicate, :func:`can_access_admin_view`, used by both the API
dependencies below and the routing boundary in ``app.views``.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status

from ..api.dependencies import get_session
from ..schemas.identity import Identity
from ..services.session_service import Session


def can_access_admin_view(identity: Optional[Identity]) -> bool:
    """True only for an authenticated admin identity."""
    return identity is not None and identity.role == "admin"


def get_current_identity(session: Session = Depends(get_session)) -> Identity:
    """Dependency that retrieves the signed-in identity.

    Raises HTTP 401 when the session is anonymous.  The identity is
    refreshed from the store so balance updates are visible.
    """
    identity = session.refresh()
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Session"},
        )
    return identity


def require_admin(current: Identity = Depends(get_current_identity)) -> Identity:
    """Dependency that only lets admins through (HTTP 403 otherwise)."""
    if not can_access_admin_view(current):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current
