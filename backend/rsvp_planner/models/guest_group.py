"""GuestGroup and GuestGroupMember ORM models."""
import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from rsvp_planner.database import Base


class GuestGroup(Base):
    __tablename__ = "guest_groups"

    group_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    event = relationship("Event", back_populates="guest_groups")
    members = relationship("GuestGroupMember", back_populates="group", cascade="all, delete-orphan")


class GuestGroupMember(Base):
    __tablename__ = "guest_group_members"

    group_id = Column(String(36), ForeignKey("guest_groups.group_id"), primary_key=True)
    guest_id = Column(String(36), ForeignKey("guests.guest_id"), primary_key=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now())

    group = relationship("GuestGroup", back_populates="members")
    guest = relationship("Guest", back_populates="group_memberships")
