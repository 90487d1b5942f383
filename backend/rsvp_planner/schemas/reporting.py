"""Pydantic schemas for reporting responses."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class RsvpBreakdownOut(BaseModel):
    attending: int
    declined: int
    maybe: int
    pending: int
    plus_ones: int
    expected_attendees: int


class RsvpStatsOut(BaseModel):
    event_id: str
    event_name: str
    total_invited: int
    rsvp_stats: RsvpBreakdownOut
    response_rate: str


class LogisticsAttendanceOut(BaseModel):
    logistics_id: str
    name: str
    logistics_type: str
    total_assigned: int
    checked_in: int
    checked_out: int
    check_in_rate: float


class AttendanceOut(BaseModel):
    event_id: str
    event_name: str
    total_expected: int
    total_attended: int
    attendance_rate: str
    logistics_breakdown: list[LogisticsAttendanceOut]


class DemographicsBreakdownOut(BaseModel):
    gender_distribution: dict[str, int]
    age_distribution: dict[str, int]
    location_distribution: dict[str, int]
    dietary_preferences: dict[str, int]


class DemographicsOut(BaseModel):
    event_id: str
    event_name: str
    total_attendees: int
    demographics: DemographicsBreakdownOut


class EventComparisonOut(BaseModel):
    event_id: str
    name: str
    start_date: datetime
    venue_id: Optional[str] = None
    total_invited: int
    rsvp_stats: RsvpBreakdownOut
    response_rate: str
    attendance_rate: str
    checked_in: int


class UpcomingEventOut(BaseModel):
    event_id: str
    name: str
    start_date: datetime
    location: str
    guests_count: int
    confirmed_count: int


class DashboardStatsOut(BaseModel):
    total_events: int
    active_events: int
    total_guests: int
    confirmed_guests: int
    pending_guests: int
    upcoming_events: list[UpcomingEventOut]
