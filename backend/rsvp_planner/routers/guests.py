"""Guest API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from rsvp_planner.database import get_db
from rsvp_planner.models.guest import Guest
from rsvp_planner.models.rsvp import RSVPStatus
from rsvp_planner.schemas.common import Envelope
from rsvp_planner.schemas.event import GuestEventOut
from rsvp_planner.schemas.guest import GuestCreate, GuestUpdate, GuestOut
from rsvp_planner.services import guest_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Envelope[GuestOut], status_code=status.HTTP_201_CREATED)
def create_guest(payload: GuestCreate, db: Session = Depends(get_db)):
    """Create a new guest."""
    guest = Guest(**payload.model_dump())
    db.add(guest)
    db.commit()
    db.refresh(guest)
    logger.info("Created guest %s (%s)", guest.guest_id, guest.first_name)
    return {"success": True, "data": guest}


@router.get("/", response_model=Envelope[list[GuestOut]])
def list_guests(
    search: Optional[str] = Query(None, description="Matches first name, last name or email"),
    is_vip: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """List guests, optionally filtered."""
    query = db.query(Guest)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            Guest.first_name.ilike(pattern),
            Guest.last_name.ilike(pattern),
            Guest.email.ilike(pattern),
        ))
    if is_vip is not None:
        query = query.filter(Guest.is_vip.is_(is_vip))
    return {"success": True, "data": query.order_by(Guest.last_name, Guest.first_name).all()}


@router.get("/{guest_id}", response_model=Envelope[GuestOut])
def get_guest(guest_id: str, db: Session = Depends(get_db)):
    """Fetch a single guest by ID."""
    return {"success": True, "data": guest_service.get_guest(db, guest_id)}


@router.patch("/{guest_id}", response_model=Envelope[GuestOut])
def update_guest(guest_id: str, payload: GuestUpdate, db: Session = Depends(get_db)):
    """Update guest details (partial update)."""
    guest = guest_service.get_guest(db, guest_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(guest, field, value)
    db.commit()
    db.refresh(guest)
    logger.info("Updated guest %s", guest_id)
    return {"success": True, "data": guest}


@router.delete("/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guest(guest_id: str, db: Session = Depends(get_db)):
    """Delete a guest along with their invitations, RSVPs and assignments."""
    guest = guest_service.get_guest(db, guest_id)
    db.delete(guest)
    db.commit()
    logger.info("Deleted guest %s", guest_id)


@router.get("/{guest_id}/events", response_model=Envelope[list[GuestEventOut]])
def list_guest_events(
    guest_id: str,
    rsvp_status: Optional[RSVPStatus] = Query(None, alias="status"),
    upcoming: bool = Query(False),
    past: bool = Query(False),
    db: Session = Depends(get_db),
):
    """Events the guest is invited to, with their RSVP."""
    events = guest_service.list_guest_events(db, guest_id, rsvp_status, upcoming, past)
    return {"success": True, "data": events}
