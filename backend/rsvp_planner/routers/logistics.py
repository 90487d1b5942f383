"""Logistics API routes — CRUD plus capacity-guarded assignment and check-in."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from rsvp_planner.database import get_db
from rsvp_planner.models.logistics import LogisticsItem, LogisticsStatus, LogisticsType
from rsvp_planner.schemas.common import Envelope
from rsvp_planner.schemas.logistics import (
    AssignGuestsRequest, CheckInRequest, LogisticsCreate, LogisticsOut, LogisticsUpdate,
)
from rsvp_planner.services import logistics_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Envelope[LogisticsOut], status_code=status.HTTP_201_CREATED)
def create_logistics_item(payload: LogisticsCreate, db: Session = Depends(get_db)):
    """Create a logistics item, optionally assigning an initial set of guests."""
    fields = payload.model_dump(exclude={"guest_ids"})
    item = logistics_service.create_logistics_item(db, fields, payload.guest_ids)
    return {"success": True, "data": item}


@router.get("/", response_model=Envelope[list[LogisticsOut]])
def list_logistics_items(
    event_id: Optional[str] = Query(None),
    logistics_type: Optional[LogisticsType] = Query(None),
    status_filter: Optional[LogisticsStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    """List logistics items with optional filters."""
    query = db.query(LogisticsItem)
    if event_id:
        query = query.filter(LogisticsItem.event_id == event_id)
    if logistics_type:
        query = query.filter(LogisticsItem.logistics_type == logistics_type)
    if status_filter:
        query = query.filter(LogisticsItem.status == status_filter)
    return {"success": True, "data": query.order_by(LogisticsItem.created_at.desc()).all()}


@router.get("/{logistics_id}", response_model=Envelope[LogisticsOut])
def get_logistics_item(logistics_id: str, db: Session = Depends(get_db)):
    """Fetch a single logistics item with its assignments."""
    return {"success": True, "data": logistics_service.get_logistics_item(db, logistics_id)}


@router.patch("/{logistics_id}", response_model=Envelope[LogisticsOut])
def update_logistics_item(logistics_id: str, payload: LogisticsUpdate, db: Session = Depends(get_db)):
    """Partial update; capacity may not drop below the current assignment count."""
    item = logistics_service.update_logistics_item(db, logistics_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": item}


@router.delete("/{logistics_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_logistics_item(logistics_id: str, db: Session = Depends(get_db)):
    """Delete a logistics item and its assignments."""
    logistics_service.delete_logistics_item(db, logistics_id)


@router.post("/{logistics_id}/assign", response_model=Envelope[LogisticsOut])
def assign_guests(logistics_id: str, payload: AssignGuestsRequest, db: Session = Depends(get_db)):
    """Assign guests within the item's capacity — all or nothing."""
    item = logistics_service.assign_guests(db, logistics_id, payload.guest_ids)
    return {"success": True, "data": item}


@router.post("/{logistics_id}/remove", response_model=Envelope[LogisticsOut])
def remove_guests(logistics_id: str, payload: AssignGuestsRequest, db: Session = Depends(get_db)):
    """Remove guests from a logistics item."""
    item = logistics_service.remove_guests(db, logistics_id, payload.guest_ids)
    return {"success": True, "data": item}


@router.post("/{logistics_id}/checkin", response_model=Envelope[LogisticsOut])
def check_in_out(logistics_id: str, payload: CheckInRequest, db: Session = Depends(get_db)):
    """Check guests in or out of a logistics item."""
    item = logistics_service.check_in_out(db, logistics_id, payload.guest_ids, payload.action)
    return {"success": True, "data": item}
