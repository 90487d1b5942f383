"""Event data access for the reporting facade."""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from rsvp_planner.models.event import Event


class EventRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, event_id: str) -> Optional[Event]:
        return self.db.query(Event).filter(Event.event_id == event_id).first()

    def find_by_ids(self, event_ids: list[str]) -> list[Event]:
        if not event_ids:
            return []
        return self.db.query(Event).filter(Event.event_id.in_(event_ids)).all()

    def count_all(self) -> int:
        return self.db.query(Event).count()

    def count_active(self, now: datetime) -> int:
        """Events still running or yet to start."""
        return self.db.query(Event).filter(Event.end_date >= now).count()

    def list_upcoming(self, now: datetime, limit: int = 5) -> list[Event]:
        return (
            self.db.query(Event)
            .options(joinedload(Event.venue))
            .filter(Event.start_date >= now)
            .order_by(Event.start_date)
            .limit(limit)
            .all()
        )
