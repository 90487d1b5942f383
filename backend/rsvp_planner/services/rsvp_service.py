"""RSVP service — one response per (event, guest), upserted on resubmission."""
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from rsvp_planner.errors import NotFoundError
from rsvp_planner.models.guest import EventGuest
from rsvp_planner.models.rsvp import RSVP, RSVPStatus
from rsvp_planner.services.event_service import get_event

logger = logging.getLogger(__name__)


def get_rsvp(db: Session, rsvp_id: str) -> RSVP:
    rsvp = db.query(RSVP).filter(RSVP.rsvp_id == rsvp_id).first()
    if not rsvp:
        raise NotFoundError(f"RSVP not found with id {rsvp_id}")
    return rsvp


def submit_rsvp(db: Session, event_id: str, guest_id: str, fields: dict[str, Any]) -> RSVP:
    """Create or replace the guest's response for the event.

    Only invited guests may respond.  Plus-ones are dropped for anything
    other than an attending response.
    """
    get_event(db, event_id)
    invited = (
        db.query(EventGuest)
        .filter(EventGuest.event_id == event_id, EventGuest.guest_id == guest_id)
        .first()
    )
    if not invited:
        raise NotFoundError("Guest is not invited to this event")

    rsvp = (
        db.query(RSVP)
        .filter(RSVP.event_id == event_id, RSVP.guest_id == guest_id)
        .first()
    )
    if rsvp is None:
        rsvp = RSVP(event_id=event_id, guest_id=guest_id)
        db.add(rsvp)

    for field, value in fields.items():
        setattr(rsvp, field, value)
    if rsvp.status != RSVPStatus.attending:
        rsvp.plus_ones = 0
    if rsvp.status != RSVPStatus.pending:
        rsvp.responded_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(rsvp)
    logger.info("Guest %s RSVP'd '%s' to event %s", guest_id, rsvp.status.value, event_id)
    return rsvp


def update_rsvp(db: Session, rsvp_id: str, updates: dict[str, Any]) -> RSVP:
    rsvp = get_rsvp(db, rsvp_id)
    for field, value in updates.items():
        setattr(rsvp, field, value)
    if rsvp.status != RSVPStatus.attending:
        rsvp.plus_ones = 0
    if "status" in updates:
        rsvp.responded_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(rsvp)
    logger.info("Updated RSVP %s", rsvp_id)
    return rsvp


def delete_rsvp(db: Session, rsvp_id: str) -> None:
    rsvp = get_rsvp(db, rsvp_id)
    db.delete(rsvp)
    db.commit()
    logger.info("Deleted RSVP %s", rsvp_id)
