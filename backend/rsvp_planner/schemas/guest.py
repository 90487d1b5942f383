"""Pydantic schemas for Guests."""
from __future__ import annotations
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from rsvp_planner.models.guest import Gender
from rsvp_planner.schemas.common import reject_null


class GuestCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    dietary_restrictions: Optional[str] = None
    is_vip: bool = False
    notes: Optional[str] = None


class GuestUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    dietary_restrictions: Optional[str] = None
    is_vip: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("first_name", "is_vip", mode="before")
    @classmethod
    def required_fields_not_null(cls, value):
        return reject_null(value)


class GuestOut(BaseModel):
    guest_id: str
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    dietary_restrictions: Optional[str] = None
    is_vip: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
