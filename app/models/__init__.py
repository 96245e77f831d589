"""SQLAlchemy models for Clubhouse."""

from app.models.user import User
from app.models.club import Club, club_members
from app.models.event import Event, EventRegistration, EventAttendance
from app.models.stat import ClubStat

__all__ = [
    "User",
    "Club",
    "club_members",
    "Event",
    "EventRegistration",
    "EventAttendance",
    "ClubStat",
]
