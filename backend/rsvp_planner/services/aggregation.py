"""Aggregation queries — pure reductions over RSVP, guest and check-in records.

Nothing here touches the database or raises NotFound; callers are expected
to have validated the event already (see reporting_service).  Percentages
that surface in reports are two-decimal strings ("66.67"), matching what
the dashboard has always displayed.
"""
from datetime import date
from typing import Any, Iterable, Optional

from rsvp_planner.models.rsvp import RSVPStatus

AGE_BUCKETS = ("under18", "18-25", "26-35", "36-45", "46-55", "56-65", "over65", "unknown")


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, RSVPStatus) else str(status)


def rsvp_breakdown(rsvps: Iterable[Any]) -> dict[str, int]:
    """Count RSVPs per status and total the plus-ones of attending guests."""
    counts = {s.value: 0 for s in RSVPStatus}
    plus_ones_total = 0
    for rsvp in rsvps:
        key = _status_value(rsvp.status)
        counts[key] += 1
        if key == RSVPStatus.attending.value:
            plus_ones_total += rsvp.plus_ones or 0

    return {
        "attending": counts["attending"],
        "declined": counts["declined"],
        "maybe": counts["maybe"],
        "pending": counts["pending"],
        "plus_ones_total": plus_ones_total,
    }


def _percentage(numerator: int, denominator: int) -> str:
    if denominator == 0:
        return "0.00"
    return f"{numerator / denominator * 100:.2f}"


def response_rate(total_invited: int, attending: int, declined: int, maybe: int) -> str:
    return _percentage(attending + declined + maybe, total_invited)


def expected_attendees(attending: int, plus_ones_total: int) -> int:
    return attending + plus_ones_total


def attendance_rate(checked_in_count: int, total_attending: int) -> str:
    return _percentage(checked_in_count, total_attending)


def check_in_rate(checked_in: int, total_assigned: int) -> float:
    """Per logistics item rate, kept numeric for charting."""
    if total_assigned == 0:
        return 0.0
    return round(checked_in / total_assigned * 100, 2)


def calculate_age(date_of_birth: date, today: date) -> int:
    """Exact calendar age: one less if this year's birthday is still ahead."""
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def age_bucket(age: int) -> str:
    if age < 18:
        return "under18"
    if age <= 25:
        return "18-25"
    if age <= 35:
        return "26-35"
    if age <= 45:
        return "36-45"
    if age <= 55:
        return "46-55"
    if age <= 65:
        return "56-65"
    return "over65"


def _location_key(city: Optional[str], state: Optional[str]) -> Optional[str]:
    if city and state:
        return f"{city}, {state}"
    if city:
        return city
    return None


def split_dietary_restrictions(value: Optional[str]) -> list[str]:
    """Split on commas: 'Vegan, Gluten-Free' -> ['Vegan', 'Gluten-Free']."""
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def demographics(guests: Iterable[Any], today: date) -> dict[str, dict[str, int]]:
    """Gender, age, location and dietary breakdowns for attending guests."""
    gender_distribution: dict[str, int] = {}
    age_distribution = {bucket: 0 for bucket in AGE_BUCKETS}
    location_distribution: dict[str, int] = {}
    dietary_preferences: dict[str, int] = {}

    for guest in guests:
        if guest.gender:
            gender = guest.gender.value if hasattr(guest.gender, "value") else str(guest.gender)
            gender_distribution[gender] = gender_distribution.get(gender, 0) + 1

        if guest.date_of_birth:
            age_distribution[age_bucket(calculate_age(guest.date_of_birth, today))] += 1
        else:
            age_distribution["unknown"] += 1

        location = _location_key(guest.city, guest.state)
        if location:
            location_distribution[location] = location_distribution.get(location, 0) + 1

        for diet in split_dietary_restrictions(guest.dietary_restrictions):
            dietary_preferences[diet] = dietary_preferences.get(diet, 0) + 1

    return {
        "gender_distribution": gender_distribution,
        "age_distribution": age_distribution,
        "location_distribution": location_distribution,
        "dietary_preferences": dietary_preferences,
    }


def checked_in_distinct_count(assignments: Iterable[Any]) -> int:
    """Distinct guests with at least one checked-in assignment."""
    return len({a.guest_id for a in assignments if a.checked_in})


def venue_label(name: Optional[str], city: Optional[str]) -> str:
    """Dashboard location text: 'Grand Hall, Austin', or 'TBD' with no venue."""
    if not name:
        return "TBD"
    return f"{name}, {city}" if city else name
