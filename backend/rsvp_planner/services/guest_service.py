"""Guest service — lookups shared by invitations, groups and logistics, and a guest's event list."""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from rsvp_planner.errors import BadRequestError, NotFoundError
from rsvp_planner.models.event import Event
from rsvp_planner.models.guest import Guest, EventGuest
from rsvp_planner.models.rsvp import RSVP, RSVPStatus

logger = logging.getLogger(__name__)


def get_guest(db: Session, guest_id: str) -> Guest:
    guest = db.query(Guest).filter(Guest.guest_id == guest_id).first()
    if not guest:
        raise NotFoundError(f"Guest not found with id {guest_id}")
    return guest


def require_guests(db: Session, guest_ids: list[str]) -> None:
    """NotFoundError naming the first id that has no guest."""
    found = {
        row[0]
        for row in db.query(Guest.guest_id).filter(Guest.guest_id.in_(guest_ids)).all()
    }
    missing = [gid for gid in guest_ids if gid not in found]
    if missing:
        raise NotFoundError(f"Guest not found with id {missing[0]}")


def list_guest_events(
    db: Session,
    guest_id: str,
    rsvp_status: Optional[RSVPStatus] = None,
    upcoming: bool = False,
    past: bool = False,
    now: Optional[datetime] = None,
) -> list[dict[str, Any]]:
    """Events the guest is invited to, soonest first, each with the guest's RSVP if any."""
    get_guest(db, guest_id)
    if upcoming and past:
        raise BadRequestError("Choose either upcoming or past events, not both")

    now = now or datetime.now(timezone.utc)
    query = (
        db.query(Event, EventGuest.invited_at, RSVP)
        .join(EventGuest, EventGuest.event_id == Event.event_id)
        .outerjoin(RSVP, and_(RSVP.event_id == Event.event_id, RSVP.guest_id == guest_id))
        .filter(EventGuest.guest_id == guest_id)
    )
    if rsvp_status:
        query = query.filter(RSVP.status == rsvp_status)
    if upcoming:
        query = query.filter(Event.start_date >= now)
    if past:
        query = query.filter(Event.start_date < now)

    return [
        {
            "event_id": event.event_id,
            "name": event.name,
            "event_type": event.event_type,
            "start_date": event.start_date,
            "end_date": event.end_date,
            "status": event.status,
            "venue_id": event.venue_id,
            "invited_at": invited_at,
            "rsvp_status": rsvp.status if rsvp else None,
            "plus_ones": rsvp.plus_ones if rsvp else 0,
        }
        for event, invited_at, rsvp in query.order_by(Event.start_date).all()
    ]
