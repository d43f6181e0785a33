"""
API endpoints for request records.

Users submit requests and see their own records; admins see every
record and respond to them.  Listings are always recomputed from the
store: filtered by status first, then sorted newest first, then joined
with owner names.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from record_keeper_api.app.api.dependencies import (
    get_identity_store,
    get_notifier,
    get_record_store,
)
from record_keeper_api.app.core.errors import UnauthorizedAccess, to_http_exception
from record_keeper_api.app.core.security import (
    can_access_admin_view,
    get_current_identity,
    require_admin,
)
from record_keeper_api.app.schemas.identity import Identity
from record_keeper_api.app.schemas.record import (
    STATUS_ALL,
    STATUS_LABELS,
    RecordCreate,
    RecordRespond,
    RecordStatusUpdate,
    RecordView,
)
from record_keeper_api.app.services import query_service
from record_keeper_api.app.services.identity_service import IdentityStore
from record_keeper_api.app.services.notification_service import NotificationService
from record_keeper_api.app.services.record_service import RecordStore


router = APIRouter()


@router.get("", response_model=List[RecordView], summary="List records")
async def list_records(
    status_filter: str = Query(STATUS_ALL, alias="status", description="'all', 'new', 'in-progress' or 'completed'"),
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
    current: Identity = Depends(get_current_identity),
) -> List[RecordView]:
    """Return records visible to the current identity, newest first.

    Admins see every record; regular users only their own.
    """
    if can_access_admin_view(current):
        snapshot = records.list_all()
    else:
        snapshot = records.list_for_owner(current.id)
    try:
        return query_service.project_records(snapshot, identities.list_all(), status_filter)
    except Exception as e:
        raise to_http_exception(e)


@router.post(
    "",
    response_model=RecordView,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a request",
)
async def create_record(
    data: RecordCreate,
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
    notifier: NotificationService = Depends(get_notifier),
    current: Identity = Depends(get_current_identity),
) -> RecordView:
    """Create a record owned by the current identity."""
    try:
        record = records.create(current.id, data.content)
    except Exception as e:
        notifier.notify(False, "Record not added", str(e))
        raise to_http_exception(e)
    notifier.notify(True, "Record added", "Your record has been successfully added.")
    return query_service.join_owner_name([record], identities.list_all())[0]


@router.get("/{record_id}", response_model=RecordView, summary="Get one record")
async def get_record(
    record_id: str,
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
    current: Identity = Depends(get_current_identity),
) -> RecordView:
    """Users can read their own records; admins can read any."""
    try:
        record = records.get(record_id)
        if not can_access_admin_view(current) and record.user_id != current.id:
            raise UnauthorizedAccess("Not authorized to view this record")
    except Exception as e:
        raise to_http_exception(e)
    return query_service.join_owner_name([record], identities.list_all())[0]


@router.post("/{record_id}/response", response_model=RecordView, summary="Respond to a record")
async def respond_to_record(
    record_id: str,
    data: RecordRespond,
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
    notifier: NotificationService = Depends(get_notifier),
    current: Identity = Depends(require_admin),
) -> RecordView:
    """Attach a response and set the status in one step.  Admin only."""
    try:
        record = records.respond(record_id, data.response, data.status)
    except Exception as e:
        notifier.notify(False, "Response not submitted", str(e))
        raise to_http_exception(e)
    view = query_service.join_owner_name([record], identities.list_all())[0]
    notifier.notify(
        True,
        "Response submitted",
        f"Response to {view.user_name}'s request saved as {STATUS_LABELS[record.status]}.",
    )
    return view


@router.put("/{record_id}/status", response_model=RecordView, summary="Change record status")
async def update_record_status(
    record_id: str,
    update: RecordStatusUpdate,
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
    notifier: NotificationService = Depends(get_notifier),
    current: Identity = Depends(require_admin),
) -> RecordView:
    """Change the status only; any existing response is kept.  Admin only."""
    try:
        record = records.set_status(record_id, update.status)
    except Exception as e:
        notifier.notify(False, "Status not updated", str(e))
        raise to_http_exception(e)
    notifier.notify(True, "Status updated", f"Record {record.id} is now {STATUS_LABELS[record.status]}.")
    return query_service.join_owner_name([record], identities.list_all())[0]
