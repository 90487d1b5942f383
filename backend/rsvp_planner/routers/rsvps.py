"""RSVP API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rsvp_planner.database import get_db
from rsvp_planner.errors import BadRequestError
from rsvp_planner.models.rsvp import RSVP, RSVPStatus
from rsvp_planner.schemas.common import Envelope
from rsvp_planner.schemas.rsvp import RSVPSubmit, RSVPUpdate, RSVPOut, normalise_status
from rsvp_planner.services import rsvp_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Envelope[RSVPOut], status_code=status.HTTP_200_OK)
def submit_rsvp(payload: RSVPSubmit, db: Session = Depends(get_db)):
    """Set or replace an invited guest's RSVP for an event."""
    fields = payload.model_dump(exclude={"event_id", "guest_id"})
    rsvp = rsvp_service.submit_rsvp(db, payload.event_id, payload.guest_id, fields)
    return {"success": True, "data": rsvp}


@router.get("/", response_model=Envelope[list[RSVPOut]])
def list_rsvps(
    event_id: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    """List RSVPs, optionally filtered by event or status."""
    query = db.query(RSVP)
    if event_id:
        query = query.filter(RSVP.event_id == event_id)
    if status_filter:
        try:
            rsvp_status = RSVPStatus(normalise_status(status_filter))
        except ValueError:
            raise BadRequestError(f"Invalid RSVP status: {status_filter}")
        query = query.filter(RSVP.status == rsvp_status)
    return {"success": True, "data": query.order_by(RSVP.created_at).all()}


@router.get("/{rsvp_id}", response_model=Envelope[RSVPOut])
def get_rsvp(rsvp_id: str, db: Session = Depends(get_db)):
    return {"success": True, "data": rsvp_service.get_rsvp(db, rsvp_id)}


@router.patch("/{rsvp_id}", response_model=Envelope[RSVPOut])
def update_rsvp(rsvp_id: str, payload: RSVPUpdate, db: Session = Depends(get_db)):
    """Partial update of an RSVP."""
    rsvp = rsvp_service.update_rsvp(db, rsvp_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": rsvp}


@router.delete("/{rsvp_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rsvp(rsvp_id: str, db: Session = Depends(get_db)):
    rsvp_service.delete_rsvp(db, rsvp_id)
