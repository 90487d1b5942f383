"""Pydantic schemas for RSVPs."""
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from rsvp_planner.models.rsvp import RSVPStatus
from rsvp_planner.schemas.common import reject_null


def normalise_status(value: Any) -> Any:
    """Older clients send "not_attending" for a declined response."""
    if value == "not_attending":
        return RSVPStatus.declined
    return value


class RSVPSubmit(BaseModel):
    event_id: str
    guest_id: str
    status: RSVPStatus
    plus_ones: int = Field(default=0, ge=0)
    dietary_restrictions: Optional[str] = None
    message: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def accept_not_attending(cls, value: Any) -> Any:
        return normalise_status(value)


class RSVPUpdate(BaseModel):
    status: Optional[RSVPStatus] = None
    plus_ones: Optional[int] = Field(default=None, ge=0)
    dietary_restrictions: Optional[str] = None
    message: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def accept_not_attending(cls, value: Any) -> Any:
        return normalise_status(reject_null(value))

    @field_validator("plus_ones", mode="before")
    @classmethod
    def plus_ones_not_null(cls, value: Any) -> Any:
        return reject_null(value)


class RSVPOut(BaseModel):
    rsvp_id: str
    event_id: str
    guest_id: str
    status: RSVPStatus
    plus_ones: int
    dietary_restrictions: Optional[str] = None
    message: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
