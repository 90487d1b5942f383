"""Guest group API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rsvp_planner.database import get_db
from rsvp_planner.schemas.common import Envelope, GuestIdsPayload
from rsvp_planner.schemas.guest_group import GuestGroupCreate, GuestGroupUpdate, GuestGroupOut
from rsvp_planner.services import guest_group_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Envelope[GuestGroupOut], status_code=status.HTTP_201_CREATED)
def create_guest_group(payload: GuestGroupCreate, db: Session = Depends(get_db)):
    """Create a guest group for an event, optionally with initial members."""
    fields = payload.model_dump(exclude={"guest_ids"})
    group = guest_group_service.create_guest_group(db, fields, payload.guest_ids)
    return {"success": True, "data": group}


@router.get("/", response_model=Envelope[list[GuestGroupOut]])
def list_guest_groups(
    event_id: Optional[str] = Query(None),
    name: Optional[str] = Query(None, description="Substring match on the group name"),
    db: Session = Depends(get_db),
):
    """List guest groups, optionally filtered."""
    return {"success": True, "data": guest_group_service.list_guest_groups(db, event_id, name)}


@router.get("/{group_id}", response_model=Envelope[GuestGroupOut])
def get_guest_group(group_id: str, db: Session = Depends(get_db)):
    return {"success": True, "data": guest_group_service.get_guest_group(db, group_id)}


@router.patch("/{group_id}", response_model=Envelope[GuestGroupOut])
def update_guest_group(group_id: str, payload: GuestGroupUpdate, db: Session = Depends(get_db)):
    """Partial update; ``guest_ids`` replaces the membership."""
    group = guest_group_service.update_guest_group(db, group_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": group}


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guest_group(group_id: str, db: Session = Depends(get_db)):
    guest_group_service.delete_guest_group(db, group_id)


@router.post("/{group_id}/guests", response_model=Envelope[GuestGroupOut])
def add_guests(group_id: str, payload: GuestIdsPayload, db: Session = Depends(get_db)):
    """Add guests to the group."""
    return {"success": True, "data": guest_group_service.add_members(db, group_id, payload.guest_ids)}


@router.post("/{group_id}/guests/remove", response_model=Envelope[GuestGroupOut])
def remove_guests(group_id: str, payload: GuestIdsPayload, db: Session = Depends(get_db)):
    """Remove guests from the group."""
    return {"success": True, "data": guest_group_service.remove_members(db, group_id, payload.guest_ids)}
