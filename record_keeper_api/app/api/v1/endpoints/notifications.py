"""
Notification feed endpoint for API v1.

The presentation layer polls this route to show toasts after each
action.  Newest notifications come first.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from record_keeper_api.app.api.dependencies import get_notifier
from record_keeper_api.app.schemas.notification import Notification
from record_keeper_api.app.services.notification_service import NotificationService


router = APIRouter()


@router.get("", response_model=List[Notification])
async def list_notifications(
    limit: int = Query(20, ge=1, le=100, description="Maximum number of notifications to return"),
    notifier: NotificationService = Depends(get_notifier),
) -> List[Notification]:
    return notifier.recent(limit)
