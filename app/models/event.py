from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


class Event(Base):
    """Event model representing a scheduled club session, match or meetup."""

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    club_id = Column(Integer, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)  # e.g., 'training', 'match', 'social'
    date = Column(Date, nullable=False)
    time = Column(String(20), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    location = Column(String(255), nullable=False)
    max_attendees = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    recurring = Column(String(20), default="none", nullable=False)  # none, weekly, monthly
    coach = Column(String(100), nullable=True)
    status = Column(String(20), default="scheduled", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    club = relationship("Club", back_populates="events")
    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        cascade="all, delete-orphan",
        lazy="selectin"
    )
    attendances = relationship(
        "EventAttendance",
        back_populates="event",
        cascade="all, delete-orphan",
        lazy="selectin"
    )


class EventRegistration(Base):
    """A member's sign-up for an event."""

    __tablename__ = "event_registrations"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    status = Column(String(20), default="registered", nullable=False)
    registered_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    event = relationship("Event", back_populates="registrations")
    user = relationship("User")


class EventAttendance(Base):
    """Check-in record for a registered member, written by the club owner."""

    __tablename__ = "event_attendances"

    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    status = Column(String(20), default="present", nullable=False)  # present, late, absent
    checked_in_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    checked_in_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    event = relationship("Event", back_populates="attendances")
    user = relationship("User", foreign_keys=[user_id])
