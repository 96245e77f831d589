"""Club event endpoints: scheduling, registration and attendance."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.v1.clubs import verify_club_membership, verify_club_owner
from app.database import get_db
from app.models.club import club_members
from app.models.event import Event, EventAttendance, EventRegistration
from app.models.user import User
from app.schemas.event import (
    AttendanceMark,
    EventAttendanceResponse,
    EventBase,
    EventCreate,
    EventDetailResponse,
    EventRegistrationResponse,
    EventResponse,
    MemberEventStats,
    RecentEvent
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Attendance statuses that count as having turned up
ATTENDED_STATUSES = ("present", "late")


def get_club_event(club_id: int, event_id: int, db: Session) -> Event:
    """
    Fetch an event that belongs to the given club.

    Raises:
        HTTPException: 404 if the event does not exist in this club
    """
    event = db.query(Event).filter(
        Event.id == event_id,
        Event.club_id == club_id
    ).first()

    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )

    return event


def to_event_response(event: Event, user_id: int) -> EventResponse:
    """Shape an event as seen by one user."""
    return EventResponse(
        **{field: getattr(event, field) for field in EventBase.model_fields},
        id=event.id,
        club_id=event.club_id,
        status=event.status,
        attendees=len(event.registrations),
        is_registered=any(reg.user_id == user_id for reg in event.registrations),
        has_attended=any(
            att.user_id == user_id and att.status in ATTENDED_STATUSES for att in event.attendances
        )
    )


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    club_id: int,
    event_data: EventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Schedule a new event for a club (owner-only).

    Raises:
        HTTPException: 404 if club not found, 403 if not the owner
    """
    club = verify_club_owner(club_id, current_user.id, db, action="schedule events for")

    new_event = Event(club_id=club_id, status="scheduled", **event_data.model_dump())
    db.add(new_event)
    club.total_events = club.total_events + 1
    club.active_events = club.active_events + 1
    db.commit()
    db.refresh(new_event)
    logger.info("Created event %d in club %d", new_event.id, club_id)

    return to_event_response(new_event, current_user.id)


@router.get("", response_model=List[EventResponse])
def list_events(
    club_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a club's events, soonest first."""
    verify_club_membership(club_id, current_user.id, db)

    events = db.query(Event).filter(
        Event.club_id == club_id
    ).order_by(Event.date.asc(), Event.id.asc()).all()

    return [to_event_response(event, current_user.id) for event in events]


@router.get("/stats", response_model=MemberEventStats)
def get_member_event_stats(
    club_id: int,
    user_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Summarize a member's event participation in a club.

    Args:
        club_id: ID of the club
        user_id: Member to report on (defaults to the current user)

    Returns:
        Registration and attendance counts, attendance rate in whole percent,
        join date and the five most recent registrations

    Raises:
        HTTPException: 404 if club not found, 403 if not a member
    """
    verify_club_membership(club_id, current_user.id, db)
    target_user_id = user_id or current_user.id

    registrations = db.query(EventRegistration).join(
        Event, Event.id == EventRegistration.event_id
    ).filter(
        Event.club_id == club_id,
        EventRegistration.user_id == target_user_id
    ).order_by(EventRegistration.registered_at.asc(), Event.id.asc()).all()

    attended_event_ids = {
        event_id for (event_id,) in db.query(EventAttendance.event_id).join(
            Event, Event.id == EventAttendance.event_id
        ).filter(
            Event.club_id == club_id,
            EventAttendance.user_id == target_user_id,
            EventAttendance.status.in_(ATTENDED_STATUSES)
        ).all()
    }

    total_registered = len(registrations)
    total_attended = len(attended_event_ids)
    # Half-up rounding to a whole percent
    attendance_rate = int(total_attended * 100 / total_registered + 0.5) if total_registered else 0

    member_since = db.execute(
        select(club_members.c.joined_at).where(
            club_members.c.club_id == club_id,
            club_members.c.user_id == target_user_id
        )
    ).scalar()

    return MemberEventStats(
        user_id=target_user_id,
        events_registered=total_registered,
        events_attended=total_attended,
        attendance_rate=attendance_rate,
        member_since=member_since,
        recent_events=[
            RecentEvent(
                id=reg.event.id,
                title=reg.event.title,
                date=reg.event.date,
                attended=reg.event_id in attended_event_ids
            )
            for reg in registrations[-5:]
        ]
    )


@router.get("/{event_id}", response_model=EventDetailResponse)
def get_event(
    club_id: int,
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get an event with its registrations and attendance records.

    Raises:
        HTTPException: 404 if club or event not found, 403 if not a member
    """
    club = verify_club_membership(club_id, current_user.id, db)
    event = get_club_event(club_id, event_id, db)

    return EventDetailResponse(
        **to_event_response(event, current_user.id).model_dump(),
        registrations=[EventRegistrationResponse.model_validate(reg) for reg in event.registrations],
        attendances=[EventAttendanceResponse.model_validate(att) for att in event.attendances],
        can_mark_attendance=club.owner_id == current_user.id
    )


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    club_id: int,
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete an event with its registrations and attendance (owner-only).

    Raises:
        HTTPException: 404 if club or event not found, 403 if not the owner
    """
    club = verify_club_owner(club_id, current_user.id, db, action="delete events for")
    event = get_club_event(club_id, event_id, db)

    db.delete(event)
    club.active_events = max(club.active_events - 1, 0)
    db.commit()
    logger.info("Deleted event %d from club %d", event_id, club_id)
    return None


@router.post("/{event_id}/registrations", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def register_for_event(
    club_id: int,
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Sign the current user up for an event.

    Raises:
        HTTPException: 403 if not a member, 404 if event not found,
            400 if already registered or the event is full
    """
    verify_club_membership(club_id, current_user.id, db)
    event = get_club_event(club_id, event_id, db)

    if any(reg.user_id == current_user.id for reg in event.registrations):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are already registered for this event"
        )

    if len(event.registrations) >= event.max_attendees:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This event is full"
        )

    event.registrations.append(
        EventRegistration(user_id=current_user.id, status="registered")
    )
    db.commit()
    db.refresh(event)

    return to_event_response(event, current_user.id)


@router.delete("/{event_id}/registrations", status_code=status.HTTP_204_NO_CONTENT)
def unregister_from_event(
    club_id: int,
    event_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Withdraw the current user's registration for an event.

    Raises:
        HTTPException: 404 if event not found, 400 if not registered
    """
    event = get_club_event(club_id, event_id, db)

    registration = db.get(EventRegistration, (event.id, current_user.id))
    if not registration:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are not registered for this event"
        )

    db.delete(registration)
    db.commit()
    return None


@router.put("/{event_id}/attendance/{user_id}", response_model=EventAttendanceResponse)
def mark_attendance(
    club_id: int,
    event_id: int,
    user_id: int,
    attendance_data: AttendanceMark,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Check a registered member in, or change their recorded status (owner-only).

    Marking the same member again overwrites the earlier record.

    Raises:
        HTTPException: 403 if not the owner, 404 if event not found,
            400 if the member is not registered for the event
    """
    verify_club_owner(club_id, current_user.id, db, action="mark attendance for")
    event = get_club_event(club_id, event_id, db)

    if db.get(EventRegistration, (event.id, user_id)) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is not registered for this event"
        )

    attendance = db.get(EventAttendance, (event.id, user_id))
    if attendance is None:
        attendance = EventAttendance(event_id=event.id, user_id=user_id)
        db.add(attendance)

    attendance.status = attendance_data.status
    attendance.checked_in_by = current_user.id
    attendance.checked_in_at = func.now()
    db.commit()
    db.refresh(attendance)

    return EventAttendanceResponse.model_validate(attendance)
