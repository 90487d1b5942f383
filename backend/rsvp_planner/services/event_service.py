"""Event service — event lifecycle and guest invitations.

Responsibilities:
- Date sanity: an event may not end before it starts
- Venue reference check on create / update
- Invitation management (the event <-> guest relation that defines
  "total invited" for reporting)
"""
import logging
from datetime import datetime, timezone
from typing import Any

import pytz
from sqlalchemy.orm import Session

from rsvp_planner.errors import BadRequestError, NotFoundError
from rsvp_planner.models.event import Event
from rsvp_planner.models.guest import Guest, EventGuest
from rsvp_planner.models.venue import Venue
from rsvp_planner.services.guest_service import require_guests

logger = logging.getLogger(__name__)


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise NotFoundError(f"Event not found with id {event_id}")
    return event


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC.
    return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _check_fields(db: Session, fields: dict[str, Any]) -> None:
    start, end = fields.get("start_date"), fields.get("end_date")
    if start and end and as_utc(end) < as_utc(start):
        raise BadRequestError("Event end date must not be before its start date")

    if fields.get("timezone") and fields["timezone"] not in pytz.all_timezones_set:
        raise BadRequestError(f"Unknown timezone: {fields['timezone']}")

    venue_id = fields.get("venue_id")
    if venue_id and not db.query(Venue).filter(Venue.venue_id == venue_id).first():
        raise NotFoundError(f"Venue not found with id {venue_id}")


def create_event(db: Session, fields: dict[str, Any]) -> Event:
    _check_fields(db, fields)
    event = Event(**fields)
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s)", event.name, event.event_id)
    return event


def update_event(db: Session, event_id: str, updates: dict[str, Any]) -> Event:
    event = get_event(db, event_id)
    merged = {
        "start_date": updates.get("start_date", event.start_date),
        "end_date": updates.get("end_date", event.end_date),
        "timezone": updates.get("timezone"),
        "venue_id": updates.get("venue_id"),
    }
    _check_fields(db, merged)

    for field, value in updates.items():
        if hasattr(event, field) and field not in ("event_id", "created_at"):
            setattr(event, field, value)
    db.commit()
    db.refresh(event)
    logger.info("Updated event %s", event_id)
    return event


def delete_event(db: Session, event_id: str) -> None:
    event = get_event(db, event_id)
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s", event_id)


def invite_guests(db: Session, event_id: str, guest_ids: list[str]) -> list[EventGuest]:
    """Invite guests to an event; already-invited guests are left untouched."""
    get_event(db, event_id)
    if not guest_ids:
        raise BadRequestError("Please provide an array of guest IDs")

    unique_ids = list(dict.fromkeys(guest_ids))
    require_guests(db, unique_ids)

    existing = {
        row[0]
        for row in db.query(EventGuest.guest_id).filter(EventGuest.event_id == event_id).all()
    }
    for gid in unique_ids:
        if gid not in existing:
            db.add(EventGuest(event_id=event_id, guest_id=gid))
    db.commit()

    invitations = (
        db.query(EventGuest)
        .filter(EventGuest.event_id == event_id, EventGuest.guest_id.in_(unique_ids))
        .all()
    )
    logger.info("Invited %d guests to event %s", len(unique_ids) - len(existing & set(unique_ids)), event_id)
    return invitations


def list_invited_guests(db: Session, event_id: str) -> list[Guest]:
    get_event(db, event_id)
    return (
        db.query(Guest)
        .join(EventGuest, EventGuest.guest_id == Guest.guest_id)
        .filter(EventGuest.event_id == event_id)
        .order_by(Guest.last_name, Guest.first_name)
        .all()
    )


def remove_invitation(db: Session, event_id: str, guest_id: str) -> None:
    invitation = (
        db.query(EventGuest)
        .filter(EventGuest.event_id == event_id, EventGuest.guest_id == guest_id)
        .first()
    )
    if not invitation:
        raise NotFoundError("Guest is not invited to this event")
    db.delete(invitation)
    db.commit()
    logger.info("Removed guest %s from event %s", guest_id, event_id)
