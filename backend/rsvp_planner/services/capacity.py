"""Capacity guard for logistics item assignment."""
from typing import Optional

from rsvp_planner.errors import CapacityExceededError


def check_capacity(capacity: Optional[int], current_count: int, requested: int) -> None:
    """Raise CapacityExceededError if ``requested`` more guests would not fit.

    A full item is rejected before the batch size is even considered.
    ``capacity=None`` means the item is unbounded.
    """
    if capacity is None:
        return
    if current_count >= capacity:
        raise CapacityExceededError(
            f"Logistics item has reached maximum capacity of {capacity}",
            capacity=capacity,
        )
    if current_count + requested > capacity:
        raise CapacityExceededError(
            f"Cannot assign {requested} more guests. Would exceed capacity of {capacity}",
            capacity=capacity,
        )
