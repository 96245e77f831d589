"""Public club discovery endpoints."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from app.api.deps import get_current_user
from app.database import get_db
from app.models.club import Club
from app.models.user import User
from app.schemas.club import PublicClub, PublicClubPage
from app.utils.time_ago import time_ago

router = APIRouter()


def to_public_club(club: Club) -> PublicClub:
    """Shape a club for the discovery page, filling in display defaults."""
    owner = club.owner
    return PublicClub(
        id=club.id,
        name=club.name,
        sport=club.sport,
        description=club.description or "No description available",
        location=club.location or "Unknown location",
        members=club.member_count or 0,
        meeting_days=club.meeting_days or [],
        skill_level=club.skill_level or "Mixed",
        age_group=club.age_group or "All Ages",
        logo=club.logo,
        owner=owner.name if owner else "Unknown",
        owner_image=owner.image if owner else None,
        created=time_ago(club.created_at),
    )


def public_club_filters(sport: Optional[str], skill: Optional[str], search: Optional[str]) -> list:
    """Build the WHERE clauses shared by the page query and the total count."""
    filters = [Club.privacy == "public"]

    # "all" is what the filter dropdowns send for no filter
    if sport and sport != "all":
        filters.append(Club.sport == sport)
    if skill and skill != "all":
        filters.append(Club.skill_level == skill)
    if search:
        # Literal substring match: % and _ in the input are escaped
        needle = search.lower()
        filters.append(or_(
            func.lower(Club.name).contains(needle, autoescape=True),
            func.lower(Club.description).contains(needle, autoescape=True),
            func.lower(Club.location).contains(needle, autoescape=True),
        ))

    return filters


@router.get("", response_model=PublicClubPage)
def list_public_clubs(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=50),
    sport: Optional[str] = None,
    skill: Optional[str] = None,
    sort: Literal["recent", "members"] = "recent",
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Browse public clubs.

    Args:
        page: 1-based page number
        per_page: Page size
        sport: Only clubs for this sport ("all" for any)
        skill: Only clubs at this skill level ("all" for any)
        sort: "recent" (newest first) or "members" (largest first)
        search: Case-insensitive match on name, description or location

    Returns:
        The requested page, the total match count and the next page number
    """
    filters = public_club_filters(sport, skill, search)

    if sort == "members":
        order_by = [Club.member_count.desc(), Club.id.desc()]
    else:
        order_by = [Club.created_at.desc(), Club.id.desc()]

    # Fetch one extra row to learn whether another page exists
    clubs = db.query(Club).options(
        joinedload(Club.owner)
    ).filter(*filters).order_by(*order_by).offset(
        (page - 1) * per_page
    ).limit(per_page + 1).all()

    has_more = len(clubs) > per_page
    total = db.query(func.count(Club.id)).filter(*filters).scalar() or 0

    return PublicClubPage(
        clubs=[to_public_club(club) for club in clubs[:per_page]],
        total=total,
        has_more=has_more,
        next_page=page + 1 if has_more else None,
    )


@router.get("/{club_id}", response_model=PublicClub)
def get_public_club(
    club_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get a single public club as shown on the discovery page.

    Raises:
        HTTPException: 404 if the club does not exist or is not public
    """
    club = db.get(Club, club_id)
    if not club or club.privacy != "public":
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Club not found"
        )
    return to_public_club(club)
