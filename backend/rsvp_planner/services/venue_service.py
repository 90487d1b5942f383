"""Venue service — lookups and availability over a date range."""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from rsvp_planner.errors import BadRequestError, NotFoundError
from rsvp_planner.models.event import Event, EventStatus
from rsvp_planner.models.venue import Venue
from rsvp_planner.services.event_service import as_utc

logger = logging.getLogger(__name__)

# Drafts and cancelled events do not hold a venue.
BOOKING_STATUSES = (EventStatus.published, EventStatus.completed)


def get_venue(db: Session, venue_id: str) -> Venue:
    venue = db.query(Venue).filter(Venue.venue_id == venue_id).first()
    if not venue:
        raise NotFoundError(f"Venue not found with id {venue_id}")
    return venue


def find_available_venues(
    db: Session,
    start_date: datetime,
    end_date: datetime,
    min_capacity: Optional[int] = None,
) -> list[Venue]:
    """Venues with no booking event overlapping [start_date, end_date]."""
    start_date, end_date = as_utc(start_date), as_utc(end_date)
    if end_date < start_date:
        raise BadRequestError("End date must not be before start date")

    booked = select(Event.venue_id).where(
        Event.venue_id.isnot(None),
        Event.status.in_(BOOKING_STATUSES),
        Event.start_date <= end_date,
        Event.end_date >= start_date,
    )
    query = db.query(Venue).filter(Venue.venue_id.notin_(booked))
    if min_capacity is not None:
        query = query.filter(Venue.capacity >= min_capacity)

    venues = query.order_by(Venue.name).all()
    logger.info("%d venues available between %s and %s", len(venues), start_date, end_date)
    return venues
