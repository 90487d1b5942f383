"""RSVP ORM model — one response per (event, guest)."""
import uuid
import enum
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from rsvp_planner.database import Base


class RSVPStatus(str, enum.Enum):
    pending = "pending"
    attending = "attending"
    declined = "declined"
    maybe = "maybe"


class RSVP(Base):
    __tablename__ = "rsvps"
    __table_args__ = (UniqueConstraint("event_id", "guest_id", name="uq_rsvps_event_guest"),)

    rsvp_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False, index=True)
    guest_id = Column(String(36), ForeignKey("guests.guest_id"), nullable=False)
    status = Column(SAEnum(RSVPStatus), nullable=False, default=RSVPStatus.pending)
    plus_ones = Column(Integer, nullable=False, default=0)
    dietary_restrictions = Column(Text, nullable=True)
    message = Column(Text, nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    event = relationship("Event", back_populates="rsvps")
    guest = relationship("Guest", back_populates="rsvps")
