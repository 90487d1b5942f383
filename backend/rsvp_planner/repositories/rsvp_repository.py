"""RSVP data access for the reporting facade."""
from sqlalchemy.orm import Session

from rsvp_planner.models.rsvp import RSVP, RSVPStatus


class RsvpRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_event(self, event_id: str) -> list[RSVP]:
        return self.db.query(RSVP).filter(RSVP.event_id == event_id).all()

    def count_attending(self, event_id: str) -> int:
        return (
            self.db.query(RSVP)
            .filter(RSVP.event_id == event_id, RSVP.status == RSVPStatus.attending)
            .count()
        )

    def list_statuses(self) -> list:
        """Status and plus-ones of every RSVP, without loading full rows."""
        return self.db.query(RSVP.status, RSVP.plus_ones).all()
