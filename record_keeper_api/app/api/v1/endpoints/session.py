"""
Session endpoints for API v1.

Sign in with a name/id pairing, sign out and inspect the current
session.  The session is process-wide: signing in replaces whoever was
signed in before.
"""

from fastapi import APIRouter, Depends

from record_keeper_api.app.api.dependencies import get_notifier, get_session
from record_keeper_api.app.core.errors import InvalidCredentials, to_http_exception
from record_keeper_api.app.schemas.identity import LoginRequest, SessionState
from record_keeper_api.app.services.notification_service import NotificationService
from record_keeper_api.app.services.session_service import Session


router = APIRouter()


@router.get("", response_model=SessionState, summary="Current session")
async def get_session_state(session: Session = Depends(get_session)) -> SessionState:
    session.refresh()
    return session.state()


@router.post("/login", response_model=SessionState, summary="Sign in")
async def login(
    credentials: LoginRequest,
    session: Session = Depends(get_session),
    notifier: NotificationService = Depends(get_notifier),
) -> SessionState:
    """Authenticate with an identity ID and display name.

    Both values must match the same identity exactly.  Returns the new
    session state; a mismatch answers 401 and leaves the session
    anonymous.
    """
    try:
        identity = session.authenticate(credentials.id, credentials.name)
    except InvalidCredentials as e:
        notifier.notify(False, "Login failed", e.message)
        raise to_http_exception(e)
    except Exception as e:
        notifier.notify(False, "Login error", "An error occurred during login.")
        raise to_http_exception(e)
    notifier.notify(True, "Login successful", f"Welcome back, {identity.name}!")
    return session.state()


@router.post("/logout", response_model=SessionState, summary="Sign out")
async def logout(
    session: Session = Depends(get_session),
    notifier: NotificationService = Depends(get_notifier),
) -> SessionState:
    session.end_session()
    notifier.notify(True, "Logged out", "You have been logged out successfully.")
    return session.state()
