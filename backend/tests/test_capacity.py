"""Tests for the logistics capacity guard.

Covers:
- Guard arithmetic (full item, overflow, exact fit, unbounded)
- Assignment through the API: all-or-nothing batches
- Re-assigning already assigned guests
- Check-in of unassigned guests going through the guard
"""
import pytest

from rsvp_planner.errors import BadRequestError, CapacityExceededError
from rsvp_planner.models.logistics import LogisticsAssignment
from rsvp_planner.services.capacity import check_capacity
from tests.conftest import create_test_event, create_test_guest, create_test_logistics


class TestCheckCapacity:

    def test_full_item_rejects_any_batch(self):
        with pytest.raises(CapacityExceededError) as exc:
            check_capacity(5, 5, 1)
        assert exc.value.status_code == 400
        assert exc.value.capacity == 5
        assert exc.value.detail == "Logistics item has reached maximum capacity of 5"

    def test_full_check_precedes_batch_size(self):
        with pytest.raises(CapacityExceededError) as exc:
            check_capacity(5, 5, 0)
        assert "maximum capacity" in exc.value.detail

    def test_exact_fit_accepted(self):
        check_capacity(5, 3, 2)

    def test_overflow_rejected(self):
        with pytest.raises(CapacityExceededError) as exc:
            check_capacity(5, 3, 3)
        assert exc.value.detail == "Cannot assign 3 more guests. Would exceed capacity of 5"

    def test_unbounded(self):
        check_capacity(None, 1000, 1000)

    def test_is_a_bad_request(self):
        with pytest.raises(BadRequestError):
            check_capacity(1, 1, 1)


def _setup(client, capacity, guests=6):
    event = create_test_event(client)
    guest_ids = [create_test_guest(client, first_name=f"G{i}")["guest_id"] for i in range(guests)]
    item = create_test_logistics(client, event["event_id"], capacity=capacity)
    return event, item, guest_ids


def _assign(client, logistics_id, guest_ids):
    return client.post(f"/api/logistics/{logistics_id}/assign", json={"guest_ids": guest_ids})


class TestAssignGuests:

    def test_fill_to_capacity(self, client):
        _, item, guest_ids = _setup(client, capacity=5)
        assert _assign(client, item["logistics_id"], guest_ids[:3]).status_code == 200

        resp = _assign(client, item["logistics_id"], guest_ids[3:5])
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert len(body["data"]["assignments"]) == 5

    def test_overflow_assigns_nobody(self, client, db):
        _, item, guest_ids = _setup(client, capacity=5)
        _assign(client, item["logistics_id"], guest_ids[:3])

        resp = _assign(client, item["logistics_id"], guest_ids[3:6])
        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "error": "Cannot assign 3 more guests. Would exceed capacity of 5",
        }
        count = (
            db.query(LogisticsAssignment)
            .filter(LogisticsAssignment.logistics_id == item["logistics_id"])
            .count()
        )
        assert count == 3

    def test_full_item_rejected(self, client):
        _, item, guest_ids = _setup(client, capacity=5)
        _assign(client, item["logistics_id"], guest_ids[:5])

        resp = _assign(client, item["logistics_id"], guest_ids[5:6])
        assert resp.status_code == 400
        assert resp.json()["error"] == "Logistics item has reached maximum capacity of 5"

    def test_reassigning_existing_guests_is_not_double_counted(self, client):
        _, item, guest_ids = _setup(client, capacity=4)
        _assign(client, item["logistics_id"], guest_ids[:2])

        resp = _assign(client, item["logistics_id"], guest_ids[:4])
        assert resp.status_code == 200
        assert len(resp.json()["data"]["assignments"]) == 4

    def test_duplicate_ids_in_batch(self, client):
        _, item, guest_ids = _setup(client, capacity=2)
        resp = _assign(client, item["logistics_id"], [guest_ids[0], guest_ids[0], guest_ids[1]])
        assert resp.status_code == 200
        assert len(resp.json()["data"]["assignments"]) == 2

    def test_unknown_guest_rolls_back_batch(self, client, db):
        _, item, guest_ids = _setup(client, capacity=5)
        resp = _assign(client, item["logistics_id"], [guest_ids[0], "no-such-guest"])
        assert resp.status_code == 404
        assert db.query(LogisticsAssignment).count() == 0

    def test_unbounded_item(self, client):
        _, item, guest_ids = _setup(client, capacity=None)
        resp = _assign(client, item["logistics_id"], guest_ids)
        assert resp.status_code == 200
        assert len(resp.json()["data"]["assignments"]) == 6

    def test_missing_item(self, client):
        resp = _assign(client, "missing", ["g1"])
        assert resp.status_code == 404
        assert resp.json()["success"] is False

    def test_empty_batch(self, client):
        _, item, _ = _setup(client, capacity=5, guests=0)
        resp = _assign(client, item["logistics_id"], [])
        assert resp.status_code == 400


class TestCapacityOnCreateAndCheckIn:

    def test_initial_guests_over_capacity(self, client):
        event, _, guest_ids = _setup(client, capacity=1, guests=3)
        resp = client.post("/api/logistics/", json={
            "event_id": event["event_id"],
            "name": "Van",
            "logistics_type": "transportation",
            "capacity": 2,
            "guest_ids": guest_ids,
        })
        assert resp.status_code == 400
        assert "Would exceed capacity of 2" in resp.json()["error"]

    def test_check_in_unassigned_guest_at_full_item(self, client):
        _, item, guest_ids = _setup(client, capacity=2)
        _assign(client, item["logistics_id"], guest_ids[:2])

        resp = client.post(f"/api/logistics/{item['logistics_id']}/checkin", json={
            "guest_ids": [guest_ids[2]],
            "action": "checkin",
        })
        assert resp.status_code == 400

    def test_check_in_assigned_guest_at_full_item(self, client):
        _, item, guest_ids = _setup(client, capacity=2)
        _assign(client, item["logistics_id"], guest_ids[:2])

        resp = client.post(f"/api/logistics/{item['logistics_id']}/checkin", json={
            "guest_ids": [guest_ids[0]],
            "action": "checkin",
        })
        assert resp.status_code == 200
        checked = [a for a in resp.json()["data"]["assignments"] if a["checked_in"]]
        assert [a["guest_id"] for a in checked] == [guest_ids[0]]

    def test_capacity_cannot_drop_below_assigned(self, client):
        _, item, guest_ids = _setup(client, capacity=5)
        _assign(client, item["logistics_id"], guest_ids[:3])

        resp = client.patch(f"/api/logistics/{item['logistics_id']}", json={"capacity": 2})
        assert resp.status_code == 400
        resp = client.patch(f"/api/logistics/{item['logistics_id']}", json={"capacity": 3})
        assert resp.status_code == 200
        assert resp.json()["data"]["capacity"] == 3
