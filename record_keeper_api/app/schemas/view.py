"""
Payloads returned by the routing boundary.

Each view bundles the projections a page needs.  Markup is out of
scope; clients render these however they like.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel

from .identity import Identity
from .record import RecordView


class LoginView(BaseModel):
    view: Literal["login"] = "login"
    error: Optional[str] = None


class UserDashboardView(BaseModel):
    view: Literal["dashboard"] = "dashboard"
    user: Identity
    records: List[RecordView]


class AdminDashboardView(BaseModel):
    view: Literal["admin"] = "admin"
    user: Identity
    users: List[Identity]
    records: List[RecordView]
    status_filter: str
    search: str


class NotFoundView(BaseModel):
    view: Literal["not-found"] = "not-found"
    detail: str = "Page not found"
