"""Logistics item / assignment data access.

Used by the reporting facade for check-in figures and by the logistics
service for capacity-guarded assignment.
"""
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from rsvp_planner.models.logistics import LogisticsItem, LogisticsAssignment


class LogisticsRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_event(self, event_id: str) -> list[LogisticsItem]:
        return (
            self.db.query(LogisticsItem)
            .options(selectinload(LogisticsItem.assignments))
            .filter(LogisticsItem.event_id == event_id)
            .order_by(LogisticsItem.created_at)
            .all()
        )

    def count_distinct_checked_in_guests(self, event_id: str) -> int:
        """Guests checked in to at least one logistics item of the event, counted once."""
        count = (
            self.db.query(func.count(func.distinct(LogisticsAssignment.guest_id)))
            .join(LogisticsItem, LogisticsItem.logistics_id == LogisticsAssignment.logistics_id)
            .filter(LogisticsItem.event_id == event_id, LogisticsAssignment.checked_in.is_(True))
            .scalar()
        )
        return count or 0

    def get_for_update(self, logistics_id: str) -> Optional[LogisticsItem]:
        """Fetch the item holding a row lock until the surrounding transaction ends."""
        return (
            self.db.query(LogisticsItem)
            .filter(LogisticsItem.logistics_id == logistics_id)
            .with_for_update()
            .first()
        )

    def assignment_count(self, logistics_id: str) -> int:
        return (
            self.db.query(LogisticsAssignment)
            .filter(LogisticsAssignment.logistics_id == logistics_id)
            .count()
        )

    def assigned_guest_ids(self, logistics_id: str) -> set[str]:
        rows = (
            self.db.query(LogisticsAssignment.guest_id)
            .filter(LogisticsAssignment.logistics_id == logistics_id)
            .all()
        )
        return {row[0] for row in rows}

    def create_assignments(self, logistics_id: str, guest_ids: list[str]) -> list[LogisticsAssignment]:
        """Stage new assignments in the session; the caller commits."""
        assignments = [
            LogisticsAssignment(logistics_id=logistics_id, guest_id=gid, checked_in=False, checked_out=False)
            for gid in guest_ids
        ]
        self.db.add_all(assignments)
        return assignments
