"""Guest group service — named sets of guests within one event."""
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from rsvp_planner.errors import BadRequestError, NotFoundError
from rsvp_planner.models.guest_group import GuestGroup, GuestGroupMember
from rsvp_planner.services.event_service import get_event
from rsvp_planner.services.guest_service import require_guests

logger = logging.getLogger(__name__)


def get_guest_group(db: Session, group_id: str) -> GuestGroup:
    group = db.query(GuestGroup).filter(GuestGroup.group_id == group_id).first()
    if not group:
        raise NotFoundError(f"Guest group not found with id {group_id}")
    return group


def _member_ids(db: Session, group_id: str) -> set[str]:
    rows = db.query(GuestGroupMember.guest_id).filter(GuestGroupMember.group_id == group_id).all()
    return {row[0] for row in rows}


def list_guest_groups(db: Session, event_id: Optional[str] = None, name: Optional[str] = None) -> list[GuestGroup]:
    query = db.query(GuestGroup)
    if event_id:
        query = query.filter(GuestGroup.event_id == event_id)
    if name:
        query = query.filter(GuestGroup.name.ilike(f"%{name}%"))
    return query.order_by(GuestGroup.name).all()


def create_guest_group(db: Session, fields: dict[str, Any], guest_ids: list[str]) -> GuestGroup:
    get_event(db, fields["event_id"])
    unique_ids = list(dict.fromkeys(guest_ids))
    if unique_ids:
        require_guests(db, unique_ids)

    group = GuestGroup(**fields)
    group.members = [GuestGroupMember(guest_id=gid) for gid in unique_ids]
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("Created guest group '%s' (%s) with %d guests", group.name, group.group_id, len(unique_ids))
    return group


def update_guest_group(db: Session, group_id: str, updates: dict[str, Any]) -> GuestGroup:
    """Partial update; a ``guest_ids`` list replaces the whole membership."""
    group = get_guest_group(db, group_id)
    guest_ids = updates.pop("guest_ids", None)
    if guest_ids is not None:
        unique_ids = list(dict.fromkeys(guest_ids))
        if unique_ids:
            require_guests(db, unique_ids)
        current = {m.guest_id: m for m in group.members}
        group.members = [current.get(gid) or GuestGroupMember(guest_id=gid) for gid in unique_ids]

    for field, value in updates.items():
        setattr(group, field, value)
    db.commit()
    db.refresh(group)
    logger.info("Updated guest group %s", group_id)
    return group


def delete_guest_group(db: Session, group_id: str) -> None:
    group = get_guest_group(db, group_id)
    db.delete(group)
    db.commit()
    logger.info("Deleted guest group %s", group_id)


def add_members(db: Session, group_id: str, guest_ids: list[str]) -> GuestGroup:
    """Add guests to the group; current members are left as they are."""
    group = get_guest_group(db, group_id)
    if not guest_ids:
        raise BadRequestError("Please provide an array of guest IDs")
    unique_ids = list(dict.fromkeys(guest_ids))
    require_guests(db, unique_ids)

    current = _member_ids(db, group_id)
    added = [gid for gid in unique_ids if gid not in current]
    db.add_all(GuestGroupMember(group_id=group_id, guest_id=gid) for gid in added)
    db.commit()
    db.refresh(group)
    logger.info("Added %d guests to guest group %s", len(added), group_id)
    return group


def remove_members(db: Session, group_id: str, guest_ids: list[str]) -> GuestGroup:
    group = get_guest_group(db, group_id)
    if not guest_ids:
        raise BadRequestError("Please provide an array of guest IDs")

    removed = (
        db.query(GuestGroupMember)
        .filter(GuestGroupMember.group_id == group_id, GuestGroupMember.guest_id.in_(guest_ids))
        .delete(synchronize_session=False)
    )
    db.commit()
    db.refresh(group)
    logger.info("Removed %d guests from guest group %s", removed, group_id)
    return group
