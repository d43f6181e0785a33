"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers (session, users,
records, notifications) under a unified prefix.  When new domains are
introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import notifications, records, session, users


router = APIRouter()

router.include_router(session.router, prefix="/session", tags=["session"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(records.router, prefix="/records", tags=["records"])
router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
