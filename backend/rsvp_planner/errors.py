"""Error taxonomy raised by services and rendered by the app's exception handlers."""
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """A referenced event, guest, venue, RSVP or logistics item does not exist."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """Malformed or semantically invalid input."""

    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class CapacityExceededError(BadRequestError):
    """A logistics item cannot accept the requested guests."""

    def __init__(self, detail: str, capacity: int):
        super().__init__(detail=detail)
        self.capacity = capacity
