"""Reporting facade — composes aggregation queries into event reports.

Repositories are injected explicitly so the facade never walks ORM
relationships on its own; every read it performs is one of the named
repository queries.  Event existence is checked here, before any
aggregation runs, and a missing event surfaces as NotFoundError with no
partial data.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

import pytz

from rsvp_planner.config import settings
from rsvp_planner.errors import BadRequestError, NotFoundError
from rsvp_planner.models.event import Event
from rsvp_planner.repositories.event_repository import EventRepository
from rsvp_planner.repositories.guest_repository import GuestRepository
from rsvp_planner.repositories.logistics_repository import LogisticsRepository
from rsvp_planner.repositories.rsvp_repository import RsvpRepository
from rsvp_planner.services import aggregation

logger = logging.getLogger(__name__)


def reporting_today() -> date:
    """Today's date in the configured reporting timezone."""
    return datetime.now(pytz.timezone(settings.REPORTING_TIMEZONE)).date()


class ReportingService:
    def __init__(
        self,
        events: EventRepository,
        guests: GuestRepository,
        rsvps: RsvpRepository,
        logistics: LogisticsRepository,
        today: Optional[Callable[[], date]] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.events = events
        self.guests = guests
        self.rsvps = rsvps
        self.logistics = logistics
        self._today = today or reporting_today
        self._now = now or (lambda: datetime.now(timezone.utc))

    def _require_event(self, event_id: str) -> Event:
        event = self.events.find_by_id(event_id)
        if not event:
            raise NotFoundError(f"Event not found with id {event_id}")
        return event

    def _rsvp_summary(self, event_id: str) -> dict[str, int]:
        breakdown = aggregation.rsvp_breakdown(self.rsvps.list_for_event(event_id))
        return {
            "attending": breakdown["attending"],
            "declined": breakdown["declined"],
            "maybe": breakdown["maybe"],
            "pending": breakdown["pending"],
            "plus_ones": breakdown["plus_ones_total"],
            "expected_attendees": aggregation.expected_attendees(
                breakdown["attending"], breakdown["plus_ones_total"]
            ),
        }

    def get_rsvp_stats(self, event_id: str) -> dict[str, Any]:
        event = self._require_event(event_id)
        total_invited = self.guests.count_for_event(event_id)
        summary = self._rsvp_summary(event_id)

        logger.info("RSVP stats for event %s: %d invited", event_id, total_invited)
        return {
            "event_id": event.event_id,
            "event_name": event.name,
            "total_invited": total_invited,
            "rsvp_stats": summary,
            "response_rate": aggregation.response_rate(
                total_invited, summary["attending"], summary["declined"], summary["maybe"]
            ),
        }

    def get_attendance_tracking(self, event_id: str) -> dict[str, Any]:
        event = self._require_event(event_id)

        breakdown = []
        all_assignments = []
        for item in self.logistics.list_for_event(event_id):
            assignments = list(item.assignments)
            all_assignments.extend(assignments)
            checked_in = sum(1 for a in assignments if a.checked_in)
            checked_out = sum(1 for a in assignments if a.checked_out)
            breakdown.append({
                "logistics_id": item.logistics_id,
                "name": item.name,
                "logistics_type": getattr(item.logistics_type, "value", item.logistics_type),
                "total_assigned": len(assignments),
                "checked_in": checked_in,
                "checked_out": checked_out,
                "check_in_rate": aggregation.check_in_rate(checked_in, len(assignments)),
            })

        total_expected = self.rsvps.count_attending(event_id)
        total_attended = aggregation.checked_in_distinct_count(all_assignments)

        logger.info(
            "Attendance for event %s: %d of %d attending guests checked in",
            event_id, total_attended, total_expected,
        )
        return {
            "event_id": event.event_id,
            "event_name": event.name,
            "total_expected": total_expected,
            "total_attended": total_attended,
            "attendance_rate": aggregation.attendance_rate(total_attended, total_expected),
            "logistics_breakdown": breakdown,
        }

    def get_demographics(self, event_id: str) -> dict[str, Any]:
        event = self._require_event(event_id)
        attending_guests = self.guests.list_with_attending_rsvp(event_id)

        return {
            "event_id": event.event_id,
            "event_name": event.name,
            "total_attendees": len(attending_guests),
            "demographics": aggregation.demographics(attending_guests, self._today()),
        }

    def compare_events(self, event_ids: list[str]) -> list[dict[str, Any]]:
        """Side-by-side RSVP and attendance figures, one record per requested id in request order.

        Every requested id must resolve to its own event; a repeated id
        leaves the found count short of the requested count and fails the
        whole comparison like any missing event.
        """
        if len(event_ids) < 2:
            raise BadRequestError("Please provide at least two event IDs for comparison")

        events = {e.event_id: e for e in self.events.find_by_ids(event_ids)}
        if len(events) != len(event_ids):
            missing = [eid for eid in event_ids if eid not in events]
            logger.info(
                "Event comparison rejected, missing events: %s, requested: %d, found: %d",
                missing, len(event_ids), len(events),
            )
            raise NotFoundError("One or more events not found")

        comparison = []
        for eid in event_ids:
            event = events[eid]
            total_invited = self.guests.count_for_event(eid)
            summary = self._rsvp_summary(eid)
            checked_in = self.logistics.count_distinct_checked_in_guests(eid)
            comparison.append({
                "event_id": event.event_id,
                "name": event.name,
                "start_date": event.start_date,
                "venue_id": event.venue_id,
                "total_invited": total_invited,
                "rsvp_stats": summary,
                "response_rate": aggregation.response_rate(
                    total_invited, summary["attending"], summary["declined"], summary["maybe"]
                ),
                "attendance_rate": aggregation.attendance_rate(checked_in, summary["attending"]),
                "checked_in": checked_in,
            })

        logger.info("Compared %d events", len(comparison))
        return comparison

    def get_dashboard_stats(self, upcoming_limit: int = 5) -> dict[str, Any]:
        """Organisation-wide totals plus the next few events with their head counts."""
        now = self._now()
        breakdown = aggregation.rsvp_breakdown(self.rsvps.list_statuses())

        upcoming = []
        for event in self.events.list_upcoming(now, upcoming_limit):
            venue = event.venue
            upcoming.append({
                "event_id": event.event_id,
                "name": event.name,
                "start_date": event.start_date,
                "location": aggregation.venue_label(
                    venue.name if venue else None, venue.city if venue else None
                ),
                "guests_count": self.guests.count_for_event(event.event_id),
                "confirmed_count": self.rsvps.count_attending(event.event_id),
            })

        return {
            "total_events": self.events.count_all(),
            "active_events": self.events.count_active(now),
            "total_guests": self.guests.count_all(),
            "confirmed_guests": breakdown["attending"],
            "pending_guests": breakdown["pending"],
            "upcoming_events": upcoming,
        }
