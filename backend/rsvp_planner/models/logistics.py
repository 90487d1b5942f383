"""LogisticsItem and LogisticsAssignment ORM models."""
import uuid
import enum
from sqlalchemy import (
    Column, String, Text, DateTime, Integer, Numeric, Boolean, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from rsvp_planner.database import Base


class LogisticsType(str, enum.Enum):
    accommodation = "accommodation"
    transportation = "transportation"
    equipment = "equipment"
    catering = "catering"
    venue = "venue"
    other = "other"


class LogisticsStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class LogisticsItem(Base):
    __tablename__ = "logistics_items"

    logistics_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False, index=True)
    logistics_type = Column(SAEnum(LogisticsType), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(500), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    capacity = Column(Integer, nullable=True)  # None = unbounded
    status = Column(SAEnum(LogisticsStatus), nullable=False, default=LogisticsStatus.pending)
    provider = Column(String(255), nullable=True)
    cost = Column(Numeric(10, 2), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    event = relationship("Event", back_populates="logistics")
    assignments = relationship(
        "LogisticsAssignment", back_populates="logistics_item", cascade="all, delete-orphan"
    )


class LogisticsAssignment(Base):
    __tablename__ = "logistics_assignments"

    logistics_id = Column(String(36), ForeignKey("logistics_items.logistics_id"), primary_key=True)
    guest_id = Column(String(36), ForeignKey("guests.guest_id"), primary_key=True)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now())
    checked_in = Column(Boolean, nullable=False, default=False)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_out = Column(Boolean, nullable=False, default=False)
    checked_out_at = Column(DateTime(timezone=True), nullable=True)

    logistics_item = relationship("LogisticsItem", back_populates="assignments")
    guest = relationship("Guest", back_populates="assignments")
