"""Event API routes — delegates to event_service for validation and invitations."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rsvp_planner.database import get_db
from rsvp_planner.models.event import Event, EventStatus, EventType
from rsvp_planner.schemas.common import Envelope, GuestIdsPayload
from rsvp_planner.schemas.event import EventCreate, EventUpdate, EventOut, InvitationOut
from rsvp_planner.schemas.guest import GuestOut
from rsvp_planner.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Envelope[EventOut], status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    """Create a new event."""
    event = event_service.create_event(db, payload.model_dump())
    return {"success": True, "data": event}


@router.get("/", response_model=Envelope[list[EventOut]])
def list_events(
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    event_type: Optional[EventType] = Query(None),
    db: Session = Depends(get_db),
):
    """List events with optional filters, soonest first."""
    query = db.query(Event)
    if status_filter:
        query = query.filter(Event.status == status_filter)
    if event_type:
        query = query.filter(Event.event_type == event_type)
    return {"success": True, "data": query.order_by(Event.start_date).all()}


@router.get("/{event_id}", response_model=Envelope[EventOut])
def get_event(event_id: str, db: Session = Depends(get_db)):
    """Fetch a single event by ID."""
    return {"success": True, "data": event_service.get_event(db, event_id)}


@router.patch("/{event_id}", response_model=Envelope[EventOut])
def update_event(event_id: str, payload: EventUpdate, db: Session = Depends(get_db)):
    """Partial update of an event."""
    event = event_service.update_event(db, event_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": event}


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, db: Session = Depends(get_db)):
    """Delete an event with its invitations, RSVPs and logistics."""
    event_service.delete_event(db, event_id)


@router.post("/{event_id}/guests", response_model=Envelope[list[InvitationOut]])
def invite_guests(event_id: str, payload: GuestIdsPayload, db: Session = Depends(get_db)):
    """Invite existing guests to the event."""
    return {"success": True, "data": event_service.invite_guests(db, event_id, payload.guest_ids)}


@router.get("/{event_id}/guests", response_model=Envelope[list[GuestOut]])
def list_event_guests(event_id: str, db: Session = Depends(get_db)):
    """List the guests invited to the event."""
    return {"success": True, "data": event_service.list_invited_guests(db, event_id)}


@router.delete("/{event_id}/guests/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_event_guest(event_id: str, guest_id: str, db: Session = Depends(get_db)):
    """Withdraw a guest's invitation."""
    event_service.remove_invitation(db, event_id, guest_id)
