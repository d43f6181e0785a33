"""Pydantic schema for notifications shown by the presentation layer."""

from datetime import datetime

from pydantic import BaseModel, Field


class Notification(BaseModel):
    success: bool
    title: str = Field(..., examples=["Record added"])
    message: str = Field(..., examples=["Your record has been successfully added."])
    created_at: datetime
