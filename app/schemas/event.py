"""Pydantic schemas for Event model and its registrations."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    """Base event schema with common fields."""
    title: str = Field(min_length=1, max_length=100)
    type: str = Field(min_length=1, max_length=50)
    date: date
    time: str = Field(min_length=1, max_length=20)
    duration: int = Field(gt=0, description="Length in minutes")
    location: str = Field(min_length=1, max_length=255)
    max_attendees: int = Field(gt=0)
    description: Optional[str] = None
    recurring: str = "none"
    coach: Optional[str] = None


class EventCreate(EventBase):
    """Schema for scheduling a new event."""
    pass


class EventUser(BaseModel):
    """A user attached to an event registration or check-in."""
    id: int
    name: str
    image: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class EventRegistrationResponse(BaseModel):
    """Schema for an event registration."""
    user: EventUser
    status: str
    registered_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventAttendanceResponse(BaseModel):
    """Schema for an attendance record."""
    user: EventUser
    status: str
    checked_in_at: datetime
    checked_in_by: Optional[int]

    model_config = ConfigDict(from_attributes=True)


class EventResponse(EventBase):
    """Schema for event responses, seen from the requesting user."""
    id: int
    club_id: int
    status: str
    attendees: int
    is_registered: bool
    has_attended: bool


class EventDetailResponse(EventResponse):
    """Event with its full registration and attendance lists."""
    registrations: List[EventRegistrationResponse]
    attendances: List[EventAttendanceResponse]
    can_mark_attendance: bool


class AttendanceMark(BaseModel):
    """Schema for checking a registered member in."""
    status: Literal["present", "late", "absent"] = "present"


class RecentEvent(BaseModel):
    """An event a member registered for, and whether they showed up."""
    id: int
    title: str
    date: date
    attended: bool


class MemberEventStats(BaseModel):
    """A member's event participation in one club."""
    user_id: int
    events_registered: int
    events_attended: int
    attendance_rate: int
    member_since: Optional[datetime]
    recent_events: List[RecentEvent]
