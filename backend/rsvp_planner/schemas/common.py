"""Response envelope shared by every endpoint."""
from typing import Any, Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T


class GuestIdsPayload(BaseModel):
    guest_ids: list[str]


def reject_null(value: Any) -> Any:
    """Partial updates may omit a field but never clear a required one."""
    if value is None:
        raise ValueError("may not be null")
    return value
