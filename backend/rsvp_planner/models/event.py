"""Event ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from rsvp_planner.database import Base


class EventType(str, enum.Enum):
    wedding = "wedding"
    corporate = "corporate"
    birthday = "birthday"
    other = "other"


class EventStatus(str, enum.Enum):
    draft = "draft"
    published = "published"
    cancelled = "cancelled"
    completed = "completed"


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    event_type = Column(SAEnum(EventType), nullable=False, default=EventType.wedding)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    timezone = Column(String(50), nullable=False, default="UTC")  # IANA tz
    status = Column(SAEnum(EventStatus), nullable=False, default=EventStatus.draft)
    max_attendees = Column(Integer, nullable=True)
    venue_id = Column(String(36), ForeignKey("venues.venue_id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    venue = relationship("Venue", back_populates="events")
    invitations = relationship("EventGuest", back_populates="event", cascade="all, delete-orphan")
    rsvps = relationship("RSVP", back_populates="event", cascade="all, delete-orphan")
    logistics = relationship("LogisticsItem", back_populates="event", cascade="all, delete-orphan")
    guest_groups = relationship("GuestGroup", back_populates="event", cascade="all, delete-orphan")
