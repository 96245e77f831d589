"""Custom club stat endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.v1.clubs import verify_club_membership, verify_club_owner
from app.config import settings
from app.database import get_db
from app.models.stat import ClubStat
from app.models.user import User
from app.schemas.stat import ClubStatCreate, ClubStatResponse, ClubStatUpdate

router = APIRouter()


def get_club_stat(club_id: int, stat_id: int, db: Session) -> ClubStat:
    """
    Fetch a stat that belongs to the given club.

    Raises:
        HTTPException: 404 if the stat does not exist in this club
    """
    stat = db.query(ClubStat).filter(
        ClubStat.id == stat_id,
        ClubStat.club_id == club_id
    ).first()

    if not stat:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Stat not found"
        )

    return stat


@router.get("", response_model=List[ClubStatResponse])
def list_stats(
    club_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a club's custom stats in the order they were added."""
    verify_club_membership(club_id, current_user.id, db)
    return db.query(ClubStat).filter(
        ClubStat.club_id == club_id
    ).order_by(ClubStat.id.asc()).all()


@router.post("", response_model=ClubStatResponse, status_code=status.HTTP_201_CREATED)
def create_stat(
    club_id: int,
    stat_data: ClubStatCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add a custom stat to a club (owner-only).

    Raises:
        HTTPException: 404 if club not found, 403 if not the owner,
            400 if the club already has the maximum number of stats
    """
    verify_club_owner(club_id, current_user.id, db)

    existing = db.query(func.count(ClubStat.id)).filter(ClubStat.club_id == club_id).scalar()
    if existing >= settings.MAX_CLUB_STATS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"You can only have a maximum of {settings.MAX_CLUB_STATS} custom stats for a club"
        )

    new_stat = ClubStat(
        club_id=club_id,
        label=stat_data.label,
        value=stat_data.value,
        unit=stat_data.unit,
        icon=stat_data.icon or "Activity"
    )
    db.add(new_stat)
    db.commit()
    db.refresh(new_stat)

    return new_stat


@router.put("/{stat_id}", response_model=ClubStatResponse)
def update_stat(
    club_id: int,
    stat_id: int,
    stat_data: ClubStatUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace a stat's label, value and unit (owner-only). The icon is kept unless given."""
    verify_club_owner(club_id, current_user.id, db)
    stat = get_club_stat(club_id, stat_id, db)

    stat.label = stat_data.label
    stat.value = stat_data.value
    stat.unit = stat_data.unit
    if stat_data.icon:
        stat.icon = stat_data.icon

    db.commit()
    db.refresh(stat)
    return stat


@router.delete("/{stat_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_stat(
    club_id: int,
    stat_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a stat from a club (owner-only)."""
    verify_club_owner(club_id, current_user.id, db)
    stat = get_club_stat(club_id, stat_id, db)

    db.delete(stat)
    db.commit()
    return None
