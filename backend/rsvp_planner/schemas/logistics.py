"""Pydantic schemas for logistics items, assignments and check-in."""
from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from rsvp_planner.models.logistics import LogisticsStatus, LogisticsType
from rsvp_planner.schemas.common import reject_null


class LogisticsCreate(BaseModel):
    event_id: str
    logistics_type: LogisticsType
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    status: LogisticsStatus = LogisticsStatus.pending
    provider: Optional[str] = None
    cost: Optional[Decimal] = None
    notes: Optional[str] = None
    guest_ids: list[str] = []


class LogisticsUpdate(BaseModel):
    logistics_type: Optional[LogisticsType] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    status: Optional[LogisticsStatus] = None
    provider: Optional[str] = None
    cost: Optional[Decimal] = None
    notes: Optional[str] = None

    @field_validator("logistics_type", "name", "status", mode="before")
    @classmethod
    def required_fields_not_null(cls, value):
        return reject_null(value)


class AssignmentOut(BaseModel):
    guest_id: str
    assigned_at: Optional[datetime] = None
    checked_in: bool
    checked_in_at: Optional[datetime] = None
    checked_out: bool
    checked_out_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LogisticsOut(BaseModel):
    logistics_id: str
    event_id: str
    logistics_type: LogisticsType
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    capacity: Optional[int] = None
    status: LogisticsStatus
    provider: Optional[str] = None
    cost: Optional[Decimal] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    assignments: list[AssignmentOut] = []

    model_config = {"from_attributes": True}


class AssignGuestsRequest(BaseModel):
    guest_ids: list[str] = Field(min_length=1)


class CheckInRequest(BaseModel):
    guest_ids: list[str] = Field(min_length=1)
    action: Literal["checkin", "checkout"] = "checkin"


# Rebuild LogisticsOut now that AssignmentOut is defined
LogisticsOut.model_rebuild()
