"""Pydantic schemas for Venues."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from rsvp_planner.schemas.common import reject_null


class VenueCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)


class VenueUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, value):
        return reject_null(value)


class VenueOut(BaseModel):
    venue_id: str
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    capacity: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
