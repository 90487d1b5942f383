"""Logistics service — guest assignment, removal and check-in.

Assignment is a single reserve-capacity operation: the logistics item row
is locked with SELECT ... FOR UPDATE, the current assignment count is read
under that lock, the capacity guard runs, and every new assignment is
written in the same transaction.  Concurrent requests against one item
therefore serialise on the lock instead of both passing the count check.
Any failure rolls the whole batch back; no guest is ever partially
assigned.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session

from rsvp_planner.errors import BadRequestError, NotFoundError
from rsvp_planner.models.event import Event
from rsvp_planner.models.logistics import LogisticsItem, LogisticsAssignment
from rsvp_planner.repositories.logistics_repository import LogisticsRepository
from rsvp_planner.services.capacity import check_capacity
from rsvp_planner.services.guest_service import require_guests

logger = logging.getLogger(__name__)


def _reserve(repo: LogisticsRepository, item: LogisticsItem, guest_ids: list[str]) -> list[str]:
    """Guard and stage assignments for an already-locked item; returns the newly added ids.

    Guests already assigned to the item are dropped from the batch before
    counting, so re-submitting a batch never trips the capacity check on
    its own members.
    """
    current = repo.assignment_count(item.logistics_id)
    already = repo.assigned_guest_ids(item.logistics_id)
    new_ids = [gid for gid in dict.fromkeys(guest_ids) if gid not in already]

    check_capacity(item.capacity, current, len(new_ids))
    if new_ids:
        repo.create_assignments(item.logistics_id, new_ids)
    return new_ids


def get_logistics_item(db: Session, logistics_id: str) -> LogisticsItem:
    item = db.query(LogisticsItem).filter(LogisticsItem.logistics_id == logistics_id).first()
    if not item:
        raise NotFoundError(f"Logistics item not found with id {logistics_id}")
    return item


def create_logistics_item(db: Session, fields: dict[str, Any], guest_ids: list[str]) -> LogisticsItem:
    """Create an item and, optionally, its initial assignments in one commit."""
    event = db.query(Event).filter(Event.event_id == fields["event_id"]).first()
    if not event:
        raise NotFoundError(f"Event not found with id {fields['event_id']}")

    if guest_ids:
        require_guests(db, guest_ids)
        check_capacity(fields.get("capacity"), 0, len(set(guest_ids)))

    item = LogisticsItem(**fields)
    db.add(item)
    try:
        db.flush()
        if guest_ids:
            LogisticsRepository(db).create_assignments(item.logistics_id, list(dict.fromkeys(guest_ids)))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(item)
    logger.info("Created logistics item '%s' (%s) for event %s", item.name, item.logistics_id, item.event_id)
    return item


def update_logistics_item(db: Session, logistics_id: str, updates: dict[str, Any]) -> LogisticsItem:
    repo = LogisticsRepository(db)
    item = repo.get_for_update(logistics_id)
    if not item:
        raise NotFoundError(f"Logistics item not found with id {logistics_id}")

    new_capacity = updates.get("capacity")
    if new_capacity is not None:
        current = repo.assignment_count(logistics_id)
        if current > new_capacity:
            db.rollback()
            raise BadRequestError(
                f"Capacity {new_capacity} is below the {current} guests already assigned"
            )

    for field, value in updates.items():
        if hasattr(item, field) and field not in ("logistics_id", "event_id", "created_at"):
            setattr(item, field, value)
    db.commit()
    db.refresh(item)
    logger.info("Updated logistics item %s", logistics_id)
    return item


def delete_logistics_item(db: Session, logistics_id: str) -> None:
    item = get_logistics_item(db, logistics_id)
    db.delete(item)
    db.commit()
    logger.info("Deleted logistics item %s", logistics_id)


def assign_guests(db: Session, logistics_id: str, guest_ids: list[str]) -> LogisticsItem:
    """Capacity-guarded, all-or-nothing assignment of a batch of guests."""
    repo = LogisticsRepository(db)
    try:
        item = repo.get_for_update(logistics_id)
        if not item:
            raise NotFoundError(f"Logistics item not found with id {logistics_id}")
        if not guest_ids:
            raise BadRequestError("Please provide an array of guest IDs")
        require_guests(db, guest_ids)

        new_ids = _reserve(repo, item, guest_ids)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(item)
    logger.info(
        "Assigned %d guests to logistics item %s (%d requested)",
        len(new_ids), logistics_id, len(guest_ids),
    )
    return item


def remove_guests(db: Session, logistics_id: str, guest_ids: list[str]) -> LogisticsItem:
    item = get_logistics_item(db, logistics_id)
    if not guest_ids:
        raise BadRequestError("Please provide an array of guest IDs")

    removed = (
        db.query(LogisticsAssignment)
        .filter(
            LogisticsAssignment.logistics_id == logistics_id,
            LogisticsAssignment.guest_id.in_(guest_ids),
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    db.refresh(item)
    logger.info("Removed %d guests from logistics item %s", removed, logistics_id)
    return item


def check_in_out(
    db: Session,
    logistics_id: str,
    guest_ids: list[str],
    action: str = "checkin",
    at: Optional[datetime] = None,
) -> LogisticsItem:
    """Mark guests checked in or out; unassigned guests are assigned first, within capacity."""
    if action not in ("checkin", "checkout"):
        raise BadRequestError('Action must be either "checkin" or "checkout"')
    if not guest_ids:
        raise BadRequestError("Please provide an array of guest IDs")

    timestamp = at or datetime.now(timezone.utc)
    repo = LogisticsRepository(db)
    try:
        item = repo.get_for_update(logistics_id)
        if not item:
            raise NotFoundError(f"Logistics item not found with id {logistics_id}")
        require_guests(db, guest_ids)

        already = repo.assigned_guest_ids(logistics_id)
        if any(gid not in already for gid in guest_ids):
            _reserve(repo, item, guest_ids)
            db.flush()

        assignments = (
            db.query(LogisticsAssignment)
            .filter(
                LogisticsAssignment.logistics_id == logistics_id,
                LogisticsAssignment.guest_id.in_(guest_ids),
            )
            .all()
        )
        for assignment in assignments:
            if action == "checkin":
                assignment.checked_in = True
                assignment.checked_in_at = timestamp
            else:
                assignment.checked_out = True
                assignment.checked_out_at = timestamp
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(item)
    logger.info("%s of %d guests at logistics item %s", action, len(guest_ids), logistics_id)
    return item
