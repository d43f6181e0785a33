"""
Identity endpoints for API v1.

Regular users can read their own identity.  Admins can list and search
all identities, adjust balances and manage the records of a selected
user.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from record_keeper_api.app.api.dependencies import (
    get_identity_store,
    get_notifier,
    get_record_store,
)
from record_keeper_api.app.core.errors import ValidationFailed, to_http_exception
from record_keeper_api.app.core.security import get_current_identity, require_admin
from record_keeper_api.app.schemas.identity import (
    UNKNOWN_USER_NAME,
    BalanceUpdate,
    Identity,
    format_balance,
)
from record_keeper_api.app.schemas.record import STATUS_ALL, RecordCreate, RecordView
from record_keeper_api.app.services import query_service
from record_keeper_api.app.services.identity_service import IdentityStore, parse_balance
from record_keeper_api.app.services.notification_service import NotificationService
from record_keeper_api.app.services.record_service import RecordStore


router = APIRouter()


@router.get("/me", response_model=Identity, summary="Current identity")
async def read_current_identity(current: Identity = Depends(get_current_identity)) -> Identity:
    return current


@router.get("", response_model=List[Identity], summary="List identities")
async def list_users(
    search: str = Query("", description="Case-insensitive match on name or ID"),
    identities: IdentityStore = Depends(get_identity_store),
    current: Identity = Depends(require_admin),
) -> List[Identity]:
    """Return all identities in declaration order, optionally searched.

    Admin only.
    """
    return query_service.search_identities(identities.list_all(), search)


@router.get("/{user_id}", response_model=Identity, summary="Get one identity")
async def get_user(
    user_id: str,
    identities: IdentityStore = Depends(get_identity_store),
    current: Identity = Depends(require_admin),
) -> Identity:
    try:
        return identities.get(user_id)
    except Exception as e:
        raise to_http_exception(e)


@router.put("/{user_id}/balance", response_model=Identity, summary="Update balance")
async def update_balance(
    user_id: str,
    update: BalanceUpdate,
    identities: IdentityStore = Depends(get_identity_store),
    notifier: NotificationService = Depends(get_notifier),
    current: Identity = Depends(require_admin),
) -> Identity:
    """Replace an identity's balance.

    The value may be sent as a number or a numeric string; anything
    else is rejected before the store is touched.  No other rule is
    applied, negative balances included.
    """
    try:
        balance = parse_balance(update.balance)
    except ValidationFailed as e:
        notifier.notify(False, "Invalid Amount", e.message)
        raise to_http_exception(e)
    try:
        identity = identities.update_balance(user_id, balance)
    except Exception as e:
        notifier.notify(False, "Balance update failed", str(e))
        raise to_http_exception(e)
    notifier.notify(
        True,
        "Balance updated",
        f"User balance has been updated to {format_balance(identity.balance)}.",
    )
    return identity


@router.get("/{user_id}/records", response_model=List[RecordView], summary="Records of one user")
async def list_user_records(
    user_id: str,
    status_filter: str = Query(STATUS_ALL, alias="status"),
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
    current: Identity = Depends(require_admin),
) -> List[RecordView]:
    try:
        return query_service.project_records(
            records.list_for_owner(user_id), identities.list_all(), status_filter
        )
    except Exception as e:
        raise to_http_exception(e)


@router.post(
    "/{user_id}/records",
    response_model=RecordView,
    status_code=status.HTTP_201_CREATED,
    summary="Add a record for a user",
)
async def create_user_record(
    user_id: str,
    data: RecordCreate,
    identities: IdentityStore = Depends(get_identity_store),
    records: RecordStore = Depends(get_record_store),
    notifier: NotificationService = Depends(get_notifier),
    current: Identity = Depends(require_admin),
) -> RecordView:
    """Create a record on behalf of a user.

    Unknown user IDs are accepted and the record shows as "Unknown
    User", matching the lenient owner policy of the record store.
    """
    try:
        record = records.create(user_id, data.content)
    except Exception as e:
        notifier.notify(False, "Record not added", str(e))
        raise to_http_exception(e)
    owner = identities.find_by_id(user_id)
    notifier.notify(
        True,
        "Record Added",
        f"Record added for {owner.name if owner else UNKNOWN_USER_NAME}.",
    )
    return query_service.join_owner_name([record], identities.list_all())[0]
