"""Venue API routes."""
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rsvp_planner.database import get_db
from rsvp_planner.models.venue import Venue
from rsvp_planner.schemas.common import Envelope
from rsvp_planner.schemas.venue import VenueCreate, VenueUpdate, VenueOut
from rsvp_planner.services import venue_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Envelope[VenueOut], status_code=status.HTTP_201_CREATED)
def create_venue(payload: VenueCreate, db: Session = Depends(get_db)):
    """Create a new venue."""
    venue = Venue(**payload.model_dump())
    db.add(venue)
    db.commit()
    db.refresh(venue)
    logger.info("Created venue '%s' (%s)", venue.name, venue.venue_id)
    return {"success": True, "data": venue}


@router.get("/", response_model=Envelope[list[VenueOut]])
def list_venues(db: Session = Depends(get_db)):
    """List all venues."""
    return {"success": True, "data": db.query(Venue).order_by(Venue.name).all()}


@router.get("/available", response_model=Envelope[list[VenueOut]])
def available_venues(
    start_date: datetime = Query(...),
    end_date: datetime = Query(...),
    capacity: Optional[int] = Query(None, ge=1, description="Minimum venue capacity"),
    db: Session = Depends(get_db),
):
    """Venues free of published or completed events over the date range."""
    venues = venue_service.find_available_venues(db, start_date, end_date, capacity)
    return {"success": True, "data": venues}


@router.get("/{venue_id}", response_model=Envelope[VenueOut])
def get_venue(venue_id: str, db: Session = Depends(get_db)):
    return {"success": True, "data": venue_service.get_venue(db, venue_id)}


@router.patch("/{venue_id}", response_model=Envelope[VenueOut])
def update_venue(venue_id: str, payload: VenueUpdate, db: Session = Depends(get_db)):
    """Update venue details (partial update)."""
    venue = venue_service.get_venue(db, venue_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(venue, field, value)
    db.commit()
    db.refresh(venue)
    logger.info("Updated venue %s", venue_id)
    return {"success": True, "data": venue}


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_venue(venue_id: str, db: Session = Depends(get_db)):
    """Delete a venue; events that referenced it keep no venue."""
    venue = venue_service.get_venue(db, venue_id)
    for event in venue.events:
        event.venue_id = None
    db.delete(venue)
    db.commit()
    logger.info("Deleted venue %s", venue_id)
