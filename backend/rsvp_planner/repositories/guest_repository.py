"""Guest / invitation data access for the reporting facade."""
from sqlalchemy.orm import Session

from rsvp_planner.models.guest import Guest, EventGuest
from rsvp_planner.models.rsvp import RSVP, RSVPStatus


class GuestRepository:
    def __init__(self, db: Session):
        self.db = db

    def count_for_event(self, event_id: str) -> int:
        """Number of guests invited to the event."""
        return self.db.query(EventGuest).filter(EventGuest.event_id == event_id).count()

    def list_with_attending_rsvp(self, event_id: str) -> list[Guest]:
        return (
            self.db.query(Guest)
            .join(RSVP, RSVP.guest_id == Guest.guest_id)
            .filter(RSVP.event_id == event_id, RSVP.status == RSVPStatus.attending)
            .all()
        )

    def count_all(self) -> int:
        return self.db.query(Guest).count()
