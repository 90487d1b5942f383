"""Tests for the reporting facade and its endpoints.

Covers:
- RSVP stats (buckets, response rate, expected attendees)
- Attendance tracking with a guest checked in at two items
- Demographics of attending guests
- Event comparison (order, missing or repeated events, too few ids)
- Dashboard totals and upcoming events
- Facade behaviour against in-memory repositories
"""
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from rsvp_planner.errors import BadRequestError, NotFoundError
from rsvp_planner.models.rsvp import RSVPStatus
from rsvp_planner.services.reporting_service import ReportingService
from tests.conftest import (
    create_test_event, create_test_guest, create_test_logistics, invite, submit_rsvp,
)


def _check_in(client, logistics_id, guest_ids, action="checkin"):
    resp = client.post(f"/api/logistics/{logistics_id}/checkin", json={
        "guest_ids": guest_ids,
        "action": action,
    })
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


class TestRsvpStats:

    def test_rsvp_stats(self, client):
        event = create_test_event(client, name="Gala")
        guests = [create_test_guest(client, first_name=f"G{i}")["guest_id"] for i in range(4)]
        invite(client, event["event_id"], guests)
        submit_rsvp(client, event["event_id"], guests[0], "attending", plus_ones=2)
        submit_rsvp(client, event["event_id"], guests[1], "not_attending")
        submit_rsvp(client, event["event_id"], guests[2], "pending")

        resp = client.get(f"/api/reporting/events/{event['event_id']}/rsvp-stats")
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        data = body["data"]
        assert data["event_name"] == "Gala"
        assert data["total_invited"] == 4
        assert data["rsvp_stats"] == {
            "attending": 1,
            "declined": 1,
            "maybe": 0,
            "pending": 1,
            "plus_ones": 2,
            "expected_attendees": 3,
        }
        assert data["response_rate"] == "50.00"

    def test_no_invitations(self, client):
        event = create_test_event(client)
        data = client.get(f"/api/reporting/events/{event['event_id']}/rsvp-stats").json()["data"]
        assert data["total_invited"] == 0
        assert data["response_rate"] == "0.00"

    def test_missing_event(self, client):
        resp = client.get("/api/reporting/events/nope/rsvp-stats")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Event not found with id nope"}


class TestAttendance:

    def test_guest_checked_in_twice_counts_once(self, client):
        event = create_test_event(client)
        g1 = create_test_guest(client, first_name="Ann")["guest_id"]
        g2 = create_test_guest(client, first_name="Bob")["guest_id"]
        invite(client, event["event_id"], [g1, g2])
        submit_rsvp(client, event["event_id"], g1)
        submit_rsvp(client, event["event_id"], g2)

        shuttle = create_test_logistics(client, event["event_id"], name="Shuttle", guest_ids=[g1, g2])
        dinner = create_test_logistics(
            client, event["event_id"], name="Dinner", logistics_type="catering", guest_ids=[g1],
        )
        _check_in(client, shuttle["logistics_id"], [g1])
        _check_in(client, dinner["logistics_id"], [g1])

        resp = client.get(f"/api/reporting/events/{event['event_id']}/attendance")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total_expected"] == 2
        assert data["total_attended"] == 1
        assert data["attendance_rate"] == "50.00"

        by_name = {row["name"]: row for row in data["logistics_breakdown"]}
        assert by_name["Shuttle"]["total_assigned"] == 2
        assert by_name["Shuttle"]["checked_in"] == 1
        assert by_name["Shuttle"]["check_in_rate"] == 50.0
        assert by_name["Dinner"]["logistics_type"] == "catering"
        assert by_name["Dinner"]["check_in_rate"] == 100.0

    def test_checkout_is_tracked_separately(self, client):
        event = create_test_event(client)
        g1 = create_test_guest(client)["guest_id"]
        item = create_test_logistics(client, event["event_id"], guest_ids=[g1])
        _check_in(client, item["logistics_id"], [g1])
        _check_in(client, item["logistics_id"], [g1], action="checkout")

        data = client.get(f"/api/reporting/events/{event['event_id']}/attendance").json()["data"]
        row = data["logistics_breakdown"][0]
        assert row["checked_in"] == 1
        assert row["checked_out"] == 1

    def test_no_logistics(self, client):
        event = create_test_event(client)
        data = client.get(f"/api/reporting/events/{event['event_id']}/attendance").json()["data"]
        assert data["logistics_breakdown"] == []
        assert data["attendance_rate"] == "0.00"

    def test_missing_event(self, client):
        assert client.get("/api/reporting/events/nope/attendance").status_code == 404


class TestDemographics:

    def test_only_attending_guests_are_counted(self, client):
        event = create_test_event(client)
        vegan = create_test_guest(
            client, first_name="Vera", gender="female", city="Austin", state="TX",
            dietary_restrictions="Vegan, Gluten-Free",
        )["guest_id"]
        other = create_test_guest(client, first_name="Otto", gender="male", city="Berlin")["guest_id"]
        absent = create_test_guest(client, first_name="Abe", gender="male")["guest_id"]
        invite(client, event["event_id"], [vegan, other, absent])
        submit_rsvp(client, event["event_id"], vegan)
        submit_rsvp(client, event["event_id"], other)
        submit_rsvp(client, event["event_id"], absent, "declined")

        resp = client.get(f"/api/reporting/events/{event['event_id']}/demographics")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total_attendees"] == 2
        demo = data["demographics"]
        assert demo["gender_distribution"] == {"female": 1, "male": 1}
        assert demo["location_distribution"] == {"Austin, TX": 1, "Berlin": 1}
        assert demo["dietary_preferences"] == {"Vegan": 1, "Gluten-Free": 1}
        assert demo["age_distribution"]["unknown"] == 2

    def test_missing_event(self, client):
        assert client.get("/api/reporting/events/nope/demographics").status_code == 404


class TestCompareEvents:

    def test_compare_preserves_request_order(self, client):
        first = create_test_event(client, name="First")
        second = create_test_event(client, name="Second")
        guest = create_test_guest(client)["guest_id"]
        invite(client, second["event_id"], [guest])
        submit_rsvp(client, second["event_id"], guest, plus_ones=1)

        resp = client.get(
            "/api/reporting/events/compare",
            params=[("event_ids", second["event_id"]), ("event_ids", first["event_id"])],
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [row["name"] for row in data] == ["Second", "First"]
        assert data[0]["total_invited"] == 1
        assert data[0]["rsvp_stats"]["expected_attendees"] == 2
        assert data[0]["response_rate"] == "100.00"
        assert data[1]["response_rate"] == "0.00"
        assert data[1]["checked_in"] == 0

    def test_missing_event_fails_whole_request(self, client):
        event = create_test_event(client)
        resp = client.get(
            "/api/reporting/events/compare",
            params=[("event_ids", event["event_id"]), ("event_ids", "missing")],
        )
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "One or more events not found"}

    def test_needs_two_ids(self, client):
        event = create_test_event(client)
        resp = client.get("/api/reporting/events/compare", params={"event_ids": event["event_id"]})
        assert resp.status_code == 400

    def test_repeated_id_fails_whole_request(self, client):
        first = create_test_event(client, name="First")
        second = create_test_event(client, name="Second")
        resp = client.get(
            "/api/reporting/events/compare",
            params=[
                ("event_ids", first["event_id"]),
                ("event_ids", first["event_id"]),
                ("event_ids", second["event_id"]),
            ],
        )
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "One or more events not found"}

    def test_same_id_twice_is_not_a_comparison(self, client):
        event = create_test_event(client)
        resp = client.get(
            "/api/reporting/events/compare",
            params=[("event_ids", event["event_id"]), ("event_ids", event["event_id"])],
        )
        assert resp.status_code == 404

    def test_no_ids(self, client):
        assert client.get("/api/reporting/events/compare").status_code == 400


class TestDashboard:

    def test_dashboard_stats(self, client):
        now = datetime.now(timezone.utc)
        venue = client.post("/api/venues/", json={"name": "Grand Hall", "city": "Austin"}).json()["data"]
        create_test_event(
            client, name="Last Year",
            start_date=(now - timedelta(days=3)).isoformat(),
            end_date=(now - timedelta(days=2)).isoformat(),
        )
        later = create_test_event(
            client, name="Later",
            start_date=(now + timedelta(days=5)).isoformat(),
            end_date=(now + timedelta(days=5, hours=3)).isoformat(),
            venue_id=venue["venue_id"],
        )
        soon = create_test_event(client, name="Soon")

        a = create_test_guest(client, first_name="A")["guest_id"]
        b = create_test_guest(client, first_name="B")["guest_id"]
        create_test_guest(client, first_name="C")
        invite(client, soon["event_id"], [a, b])
        submit_rsvp(client, soon["event_id"], a, "attending")
        submit_rsvp(client, soon["event_id"], b, "pending")

        resp = client.get("/api/reporting/dashboard")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total_events"] == 3
        assert data["active_events"] == 2
        assert data["total_guests"] == 3
        assert data["confirmed_guests"] == 1
        assert data["pending_guests"] == 1

        upcoming = data["upcoming_events"]
        assert [e["event_id"] for e in upcoming] == [soon["event_id"], later["event_id"]]
        assert upcoming[0]["location"] == "TBD"
        assert upcoming[0]["guests_count"] == 2
        assert upcoming[0]["confirmed_count"] == 1
        assert upcoming[1]["location"] == "Grand Hall, Austin"

    def test_empty_dashboard(self, client):
        data = client.get("/api/reporting/dashboard").json()["data"]
        assert data["total_events"] == 0
        assert data["upcoming_events"] == []


# ---------------------------------------------------------------------------
# Facade against in-memory repositories
# ---------------------------------------------------------------------------
class FakeEvents:
    def __init__(self, events):
        self.events = {e.event_id: e for e in events}

    def find_by_id(self, event_id):
        return self.events.get(event_id)

    def find_by_ids(self, event_ids):
        return [self.events[eid] for eid in event_ids if eid in self.events]

    def count_all(self):
        return len(self.events)

    def count_active(self, now):
        return sum(1 for e in self.events.values() if e.end_date >= now)

    def list_upcoming(self, now, limit=5):
        upcoming = sorted((e for e in self.events.values() if e.start_date >= now), key=lambda e: e.start_date)
        return upcoming[:limit]


class FakeGuests:
    def __init__(self, invited=None, attending=None, total=0):
        self.invited = invited or {}
        self.total = total
        self.attending = attending or {}

    def count_for_event(self, event_id):
        return self.invited.get(event_id, 0)

    def count_all(self):
        return self.total

    def list_with_attending_rsvp(self, event_id):
        return self.attending.get(event_id, [])


class FakeRsvps:
    def __init__(self, rsvps=None):
        self.rsvps = rsvps or {}

    def list_for_event(self, event_id):
        return self.rsvps.get(event_id, [])

    def list_statuses(self):
        return [r for rsvps in self.rsvps.values() for r in rsvps]

    def count_attending(self, event_id):
        return sum(1 for r in self.list_for_event(event_id) if r.status == RSVPStatus.attending)


class FakeLogistics:
    def __init__(self, items=None):
        self.items = items or {}

    def list_for_event(self, event_id):
        return self.items.get(event_id, [])

    def count_distinct_checked_in_guests(self, event_id):
        return len({
            a.guest_id for item in self.list_for_event(event_id)
            for a in item.assignments if a.checked_in
        })


def _event(event_id, name, start=datetime(2026, 11, 1, tzinfo=timezone.utc), venue=None):
    return SimpleNamespace(
        event_id=event_id, name=name, venue_id=venue.venue_id if venue else None, venue=venue,
        start_date=start, end_date=start + timedelta(hours=6),
    )


@pytest.fixture
def service():
    hall = SimpleNamespace(venue_id="v1", name="Grand Hall", city="Austin")
    rsvps = {
        "e1": [
            SimpleNamespace(status=RSVPStatus.attending, plus_ones=1),
            SimpleNamespace(status=RSVPStatus.maybe, plus_ones=0),
        ],
    }
    items = {
        "e1": [SimpleNamespace(
            logistics_id="l1", name="Bus", logistics_type="transportation",
            assignments=[SimpleNamespace(guest_id="g1", checked_in=True, checked_out=False)],
        )],
    }
    attending = {
        "e1": [SimpleNamespace(
            gender=None, date_of_birth=date(2010, 6, 1), city=None, state=None,
            dietary_restrictions=None,
        )],
    }
    return ReportingService(
        events=FakeEvents([
            _event("e1", "One"),
            _event("e2", "Two", start=datetime(2026, 10, 25, tzinfo=timezone.utc), venue=hall),
            _event("e3", "Past", start=datetime(2026, 9, 1, tzinfo=timezone.utc)),
        ]),
        guests=FakeGuests(invited={"e1": 4}, attending=attending, total=6),
        rsvps=FakeRsvps(rsvps),
        logistics=FakeLogistics(items),
        today=lambda: date(2026, 10, 19),
        now=lambda: datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc),
    )


class TestReportingServiceFacade:

    def test_rsvp_stats(self, service):
        stats = service.get_rsvp_stats("e1")
        assert stats["total_invited"] == 4
        assert stats["rsvp_stats"]["expected_attendees"] == 2
        assert stats["response_rate"] == "50.00"

    def test_attendance(self, service):
        report = service.get_attendance_tracking("e1")
        assert report["total_expected"] == 1
        assert report["total_attended"] == 1
        assert report["attendance_rate"] == "100.00"
        assert report["logistics_breakdown"][0]["check_in_rate"] == 100.0

    def test_demographics_uses_injected_today(self, service):
        report = service.get_demographics("e1")
        assert report["demographics"]["age_distribution"]["under18"] == 1

    def test_missing_event_raises_before_aggregation(self, service):
        with pytest.raises(NotFoundError):
            service.get_rsvp_stats("nope")
        with pytest.raises(NotFoundError):
            service.get_attendance_tracking("nope")
        with pytest.raises(NotFoundError):
            service.get_demographics("nope")

    def test_compare_missing(self, service):
        with pytest.raises(NotFoundError):
            service.compare_events(["e1", "nope"])

    def test_compare_too_few(self, service):
        with pytest.raises(BadRequestError):
            service.compare_events(["e1"])

    def test_compare_repeated_id(self, service):
        with pytest.raises(NotFoundError):
            service.compare_events(["e1", "e1", "e2"])

    def test_compare(self, service):
        rows = service.compare_events(["e2", "e1"])
        assert [r["event_id"] for r in rows] == ["e2", "e1"]
        assert rows[1]["checked_in"] == 1
        assert rows[1]["attendance_rate"] == "100.00"
        assert rows[0]["total_invited"] == 0

    def test_dashboard_stats(self, service):
        stats = service.get_dashboard_stats()
        assert stats["total_events"] == 3
        assert stats["active_events"] == 2
        assert stats["total_guests"] == 6
        assert stats["confirmed_guests"] == 1
        assert stats["pending_guests"] == 0
        assert [e["event_id"] for e in stats["upcoming_events"]] == ["e2", "e1"]
        assert stats["upcoming_events"][0]["location"] == "Grand Hall, Austin"
        assert stats["upcoming_events"][1]["location"] == "TBD"
        assert stats["upcoming_events"][1]["guests_count"] == 4
        assert stats["upcoming_events"][1]["confirmed_count"] == 1

    def test_dashboard_upcoming_limit(self, service):
        stats = service.get_dashboard_stats(upcoming_limit=1)
        assert [e["event_id"] for e in stats["upcoming_events"]] == ["e2"]
