"""Pydantic schemas for Events and invitations."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from rsvp_planner.models.event import EventStatus, EventType
from rsvp_planner.models.rsvp import RSVPStatus
from rsvp_planner.schemas.common import reject_null


class EventCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    event_type: EventType = EventType.wedding
    start_date: datetime
    end_date: datetime
    timezone: str = "UTC"
    status: EventStatus = EventStatus.draft
    max_attendees: Optional[int] = Field(default=None, ge=1)
    venue_id: Optional[str] = None


class EventUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    timezone: Optional[str] = None
    status: Optional[EventStatus] = None
    max_attendees: Optional[int] = Field(default=None, ge=1)
    venue_id: Optional[str] = None

    @field_validator("name", "event_type", "start_date", "end_date", "timezone", "status", mode="before")
    @classmethod
    def required_fields_not_null(cls, value):
        return reject_null(value)


class EventOut(BaseModel):
    event_id: str
    name: str
    description: Optional[str] = None
    event_type: EventType
    start_date: datetime
    end_date: datetime
    timezone: str
    status: EventStatus
    max_attendees: Optional[int] = None
    venue_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class InvitationOut(BaseModel):
    event_id: str
    guest_id: str
    invited_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class GuestEventOut(BaseModel):
    """An event as seen from one invited guest."""
    event_id: str
    name: str
    event_type: EventType
    start_date: datetime
    end_date: datetime
    status: EventStatus
    venue_id: Optional[str] = None
    invited_at: Optional[datetime] = None
    rsvp_status: Optional[RSVPStatus] = None
    plus_ones: int = 0
