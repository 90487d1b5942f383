"""Pydantic schemas for guest groups."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from rsvp_planner.schemas.common import reject_null


class GuestGroupCreate(BaseModel):
    event_id: str
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: bool = True
    guest_ids: list[str] = []


class GuestGroupUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None
    guest_ids: Optional[list[str]] = None  # replaces the membership when given

    @field_validator("name", "is_active", "guest_ids", mode="before")
    @classmethod
    def required_fields_not_null(cls, value):
        return reject_null(value)


class GuestGroupMemberOut(BaseModel):
    guest_id: str
    added_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class GuestGroupOut(BaseModel):
    group_id: str
    event_id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    members: list[GuestGroupMemberOut] = []

    model_config = {"from_attributes": True}


# Rebuild GuestGroupOut now that GuestGroupMemberOut is defined
GuestGroupOut.model_rebuild()
