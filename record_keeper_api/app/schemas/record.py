"""
Pydantic schemas for request records.

A record is a single user-submitted request plus its lifecycle: a
status and an optional admin response.  ``Record`` instances are
frozen; the store replaces a record wholesale on every mutation so
readers never observe a half-updated record.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


RecordStatus = Literal["new", "in-progress", "completed"]

RECORD_STATUSES: tuple[str, ...] = ("new", "in-progress", "completed")

# Sentinel accepted by the status filter to mean "no filtering".
STATUS_ALL = "all"

STATUS_LABELS = {
    "new": "New",
    "in-progress": "In Progress",
    "completed": "Completed",
}


class Record(BaseModel):
    """Schema for a stored record."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    user_id: str = Field(..., description="ID of the owning identity")
    content: str
    timestamp: datetime = Field(..., description="Creation time (UTC)")
    status: RecordStatus = "new"
    response: Optional[str] = None
    response_timestamp: Optional[datetime] = None

    @computed_field
    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, "Unknown")


class RecordView(Record):
    """Record decorated with the owner's display name."""

    user_name: str


class RecordCreate(BaseModel):
    """Schema for submitting a new request."""

    content: str = Field(..., description="Free-text request", examples=["Need a report"])


class RecordRespond(BaseModel):
    """Admin response to a record, applied together with a status."""

    response: str = Field(..., examples=["Approved"])
    status: RecordStatus = Field(..., examples=["completed"])


class RecordStatusUpdate(BaseModel):
    """Status-only correction.  ``response`` is left untouched."""

    status: RecordStatus = Field(..., examples=["in-progress"])
