"""Reporting API routes — thin wrappers over ReportingService."""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rsvp_planner.database import get_db
from rsvp_planner.repositories.event_repository import EventRepository
from rsvp_planner.repositories.guest_repository import GuestRepository
from rsvp_planner.repositories.logistics_repository import LogisticsRepository
from rsvp_planner.repositories.rsvp_repository import RsvpRepository
from rsvp_planner.schemas.common import Envelope
from rsvp_planner.schemas.reporting import (
    AttendanceOut, DashboardStatsOut, DemographicsOut, EventComparisonOut, RsvpStatsOut,
)
from rsvp_planner.services.reporting_service import ReportingService

logger = logging.getLogger(__name__)
router = APIRouter()


def get_reporting_service(db: Session = Depends(get_db)) -> ReportingService:
    """Wire the facade to repositories bound to the request's session."""
    return ReportingService(
        events=EventRepository(db),
        guests=GuestRepository(db),
        rsvps=RsvpRepository(db),
        logistics=LogisticsRepository(db),
    )


@router.get("/dashboard", response_model=Envelope[DashboardStatsOut])
def dashboard_stats(service: ReportingService = Depends(get_reporting_service)):
    """Totals across all events and the next five upcoming events."""
    return {"success": True, "data": service.get_dashboard_stats()}


# Declared before /events/{event_id}/... so "compare" is never read as an id.
@router.get("/events/compare", response_model=Envelope[list[EventComparisonOut]])
def compare_events(
    event_ids: list[str] = Query(default=[], description="Two or more event IDs"),
    service: ReportingService = Depends(get_reporting_service),
):
    """Compare RSVP and attendance figures across events."""
    return {"success": True, "data": service.compare_events(event_ids)}


@router.get("/events/{event_id}/rsvp-stats", response_model=Envelope[RsvpStatsOut])
def rsvp_stats(event_id: str, service: ReportingService = Depends(get_reporting_service)):
    """RSVP breakdown, response rate and expected head count for an event."""
    return {"success": True, "data": service.get_rsvp_stats(event_id)}


@router.get("/events/{event_id}/attendance", response_model=Envelope[AttendanceOut])
def attendance(event_id: str, service: ReportingService = Depends(get_reporting_service)):
    """Check-in figures per logistics item and overall attendance rate."""
    return {"success": True, "data": service.get_attendance_tracking(event_id)}


@router.get("/events/{event_id}/demographics", response_model=Envelope[DemographicsOut])
def demographics(event_id: str, service: ReportingService = Depends(get_reporting_service)):
    """Gender, age, location and dietary breakdowns of attending guests."""
    return {"success": True, "data": service.get_demographics(event_id)}
