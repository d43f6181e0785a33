"""
Routing boundary for the three application views.

* ``/`` is the login view.  Signed-in identities are sent on to their
  dashboard.
* ``/dashboard`` shows the signed-in identity and its own records.
* ``/admin`` shows every identity and every record.  Only identities
  passing :func:`can_access_admin_view` get in; other signed-in
  identities are redirected to ``/dashboard``.

Anonymous access to either dashboard redirects to ``/``.  Unknown
routes outside ``/api`` redirect to the ``/404`` view (see
``not_found_redirect_handler``).
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.dependencies import get_identity_store, get_record_store, get_session
from .core.errors import to_http_exception
from .core.security import can_access_admin_view
from .schemas.record import STATUS_ALL
from .schemas.view import AdminDashboardView, LoginView, NotFoundView, UserDashboardView
from .services import query_service
from .services.identity_service import IdentityStore
from .services.record_service import RecordStore
from .services.session_service import Session


LOGIN_PATH = "/"
DASHBOARD_PATH = "/dashboard"
ADMIN_PATH = "/admin"
NOT_FOUND_PATH = "/404"
API_PREFIX = "/api"

router = APIRouter()


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=path, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get(LOGIN_PATH, response_model=LoginView, summary="Login view")
async def login_view(session: Session = Depends(get_session)):
    current = session.current
    if current is not None:
        return _redirect(ADMIN_PATH if can_access_admin_view(current) else DASHBOARD_PATH)
    return LoginView(error=session.last_error)


@router.get(DASHBOARD_PATH, response_model=UserDashboardView, summary="User dashboard")
async def user_dashboard(
    session: Session = Depends(get_session),
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
):
    current = session.refresh()
    if current is None:
        return _redirect(LOGIN_PATH)
    return UserDashboardView(
        user=current,
        records=query_service.project_records(records.list_for_owner(current.id), identities.list_all()),
    )


@router.get(ADMIN_PATH, response_model=AdminDashboardView, summary="Admin dashboard")
async def admin_dashboard(
    status_filter: str = Query(STATUS_ALL, alias="status"),
    search: str = Query(""),
    session: Session = Depends(get_session),
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
):
    current = session.refresh()
    if current is None:
        return _redirect(LOGIN_PATH)
    if not can_access_admin_view(current):
        return _redirect(DASHBOARD_PATH)
    everyone = identities.list_all()
    try:
        projected = query_service.project_records(records.list_all(), everyone, status_filter)
    except Exception as e:
        raise to_http_exception(e)
    return AdminDashboardView(
        user=current,
        users=query_service.search_identities(everyone, search),
        records=projected,
        status_filter=status_filter,
        search=search,
    )


@router.get(NOT_FOUND_PATH, response_model=NotFoundView, summary="Not found view")
async def not_found_view() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NotFoundView().model_dump())


async def not_found_redirect_handler(request: Request, exc: StarletteHTTPException):
    """Send unknown non-API routes to the not-found view.

    API routes keep their JSON error bodies, including 404s raised by
    endpoints for missing identities or records.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND and not request.url.path.startswith(API_PREFIX):
        return _redirect(NOT_FOUND_PATH)
    return await http_exception_handler(request, exc)
