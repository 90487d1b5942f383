"""Guest and EventGuest (invitation) ORM models."""
import uuid
import enum
from sqlalchemy import Column, String, Text, Date, DateTime, Boolean, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from rsvp_planner.database import Base


class Gender(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"
    prefer_not_to_say = "prefer_not_to_say"


class Guest(Base):
    __tablename__ = "guests"

    guest_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(SAEnum(Gender), nullable=True)
    dietary_restrictions = Column(Text, nullable=True)  # comma-separated
    is_vip = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    invitations = relationship("EventGuest", back_populates="guest", cascade="all, delete-orphan")
    rsvps = relationship("RSVP", back_populates="guest", cascade="all, delete-orphan")
    assignments = relationship("LogisticsAssignment", back_populates="guest", cascade="all, delete-orphan")
    group_memberships = relationship("GuestGroupMember", back_populates="guest", cascade="all, delete-orphan")


class EventGuest(Base):
    __tablename__ = "event_guests"

    event_id = Column(String(36), ForeignKey("events.event_id"), primary_key=True)
    guest_id = Column(String(36), ForeignKey("guests.guest_id"), primary_key=True)
    invited_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="invitations")
    guest = relationship("Guest", back_populates="invitations")
