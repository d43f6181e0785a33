"""
FastAPI dependencies that hand the per-application stores to routes.

``create_app`` builds the stores once and attaches them to
``app.state``; routes never reach for module-level globals.
"""

from fastapi import Request

from ..services.identity_service import IdentityStore
from ..services.notification_service import NotificationService
from ..services.record_service import RecordStore
from ..services.session_service import Session


def get_identity_store(request: Request) -> IdentityStore:
    return request.app.state.identities


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.records


def get_session(request: Request) -> Session:
    return request.app.state.session


def get_notifier(request: Request) -> NotificationService:
    return request.app.state.notifications
