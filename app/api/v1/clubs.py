"""Club management endpoints."""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, insert, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.config import settings
from app.core.exceptions import InviteCodeConflict, InviteCodeError
from app.database import get_db
from app.models.club import Club, club_members
from app.models.user import User
from app.schemas.club import (
    ClubCreate,
    ClubUpdate,
    ClubResponse,
    ClubJoin,
    ClubMemberPage,
    ClubMemberResponse
)
from app.utils.invite_code import InviteCodeAllocator, database_code_oracle, normalize_invite_code

logger = logging.getLogger(__name__)

router = APIRouter()


def get_invite_code_allocator(db: Session = Depends(get_db)) -> InviteCodeAllocator:
    """Build an invite code allocator that checks codes against the clubs table."""
    return InviteCodeAllocator(
        database_code_oracle(db),
        length=settings.INVITE_CODE_LENGTH,
        alphabet=settings.INVITE_CODE_ALPHABET,
        max_attempts=settings.INVITE_CODE_MAX_ATTEMPTS,
    )


def get_member_role(club_id: int, user_id: int, db: Session) -> Optional[str]:
    """Return the user's role in the club, or None if they are not a member."""
    return db.execute(
        select(club_members.c.role).where(
            club_members.c.club_id == club_id,
            club_members.c.user_id == user_id
        )
    ).scalar()


def verify_club_membership(club_id: int, user_id: int, db: Session) -> Club:
    """
    Verify that a user is a member of a club and return the club.

    Raises:
        HTTPException: 404 if club not found, 403 if user not a member
    """
    club = db.get(Club, club_id)
    if not club:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Club not found"
        )

    if get_member_role(club_id, user_id, db) is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not a member of this club"
        )

    return club


def verify_club_owner(club_id: int, user_id: int, db: Session, action: str = "manage") -> Club:
    """
    Verify that a user owns a club and return the club.

    Raises:
        HTTPException: 404 if club not found, 403 if user is not the owner
    """
    club = db.get(Club, club_id)
    if not club:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Club not found"
        )

    if club.owner_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only the club owner can {action} this club"
        )

    return club


def is_invite_code_conflict(exc: IntegrityError) -> bool:
    """Tell whether an integrity error came from the invite code unique index."""
    return "invite_code" in str(exc.orig).lower()


def insert_club(
    club_data: ClubCreate,
    owner: User,
    allocator: InviteCodeAllocator,
    db: Session
) -> Club:
    """
    Allocate an invite code and insert the club with its owner as admin.

    The allocator only knows a code was free when it checked. If a concurrent
    request stores the same code first, the unique index rejects the insert
    and the whole allocate-and-insert cycle starts over.

    Raises:
        AllocationExhausted: If the allocator found no free code
        OracleUnavailable: If the uniqueness check failed
        InviteCodeConflict: If every insert attempt lost its code to another club
    """
    max_attempts = settings.CLUB_CREATE_MAX_ATTEMPTS

    for attempt in range(1, max_attempts + 1):
        invite_code = allocator.generate()

        new_club = Club(
            **club_data.model_dump(),
            invite_code=invite_code,
            member_count=1,
            owner_id=owner.id
        )
        db.add(new_club)

        try:
            db.flush()
        except IntegrityError as exc:
            db.rollback()
            if not is_invite_code_conflict(exc):
                raise
            logger.warning(
                "Invite code claimed concurrently, retrying club insert (attempt %d/%d)",
                attempt,
                max_attempts
            )
            continue

        # Creator joins as admin in the same transaction
        db.execute(
            insert(club_members).values(
                user_id=owner.id,
                club_id=new_club.id,
                role="admin"
            )
        )
        owner.onboarding = False
        owner.dashboard_view = "owner"

        db.commit()
        db.refresh(new_club)
        logger.info("Created club %d for owner %d", new_club.id, owner.id)
        return new_club

    raise InviteCodeConflict(max_attempts)


@router.post("", response_model=ClubResponse, status_code=status.HTTP_201_CREATED)
def create_club(
    club_data: ClubCreate,
    current_user: User = Depends(get_current_user),
    allocator: InviteCodeAllocator = Depends(get_invite_code_allocator),
    db: Session = Depends(get_db)
):
    """
    Create a new club.

    The authenticated user becomes the owner and first admin of the club.
    A unique invite code is generated for others to join.

    Raises:
        HTTPException: 500 if no invite code could be assigned
    """
    try:
        return insert_club(club_data, current_user, allocator, db)
    except InviteCodeError:
        db.rollback()
        logger.exception("Club creation failed for user %d", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create club. Please try again."
        )


@router.get("", response_model=List[ClubResponse])
def list_clubs(
    role: Optional[Literal["owner", "member"]] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the current user's clubs, newest first.

    Args:
        role: "owner" for clubs the user owns; "member" (the default) for
            every club the user belongs to, owned ones included

    Returns:
        List of clubs
    """
    query = db.query(Club)

    if role == "owner":
        query = query.filter(Club.owner_id == current_user.id)
    else:
        query = query.join(
            club_members,
            club_members.c.club_id == Club.id
        ).filter(
            club_members.c.user_id == current_user.id
        )

    return query.order_by(Club.created_at.desc(), Club.id.desc()).all()


@router.post("/join", response_model=ClubResponse, status_code=status.HTTP_200_OK)
def join_club(
    join_data: ClubJoin,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Join a club using an invite code.

    Raises:
        HTTPException: 404 if invite code invalid, 400 if already owner or member
    """
    club = db.query(Club).filter(
        Club.invite_code == normalize_invite_code(join_data.invite_code)
    ).first()

    if not club:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid invite code"
        )

    if club.owner_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are already the owner of this club"
        )

    if get_member_role(club.id, current_user.id, db) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are already a member of this club"
        )

    db.execute(
        insert(club_members).values(
            user_id=current_user.id,
            club_id=club.id,
            role="member",
            status="active"
        )
    )
    club.member_count = club.member_count + 1
    current_user.onboarding = False
    current_user.dashboard_view = "member"
    db.commit()
    db.refresh(club)

    return club


@router.get("/{club_id}", response_model=ClubResponse)
def get_club(
    club_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get details of a specific club, including its invite code.

    Raises:
        HTTPException: 404 if club not found, 403 if not a member
    """
    return verify_club_membership(club_id, current_user.id, db)


@router.put("/{club_id}", response_model=ClubResponse)
def update_club(
    club_id: int,
    club_data: ClubUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Edit a club's information (owner-only).

    Only the fields present in the request are changed. The invite code
    cannot be edited.

    Raises:
        HTTPException: 404 if club not found, 403 if not the owner
    """
    club = verify_club_owner(club_id, current_user.id, db, action="edit")

    for field, value in club_data.model_dump(exclude_unset=True).items():
        setattr(club, field, value)

    db.commit()
    db.refresh(club)
    logger.info("Updated club %d", club.id)
    return club


@router.get("/{club_id}/members", response_model=ClubMemberPage)
def list_club_members(
    club_id: int,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List a club's members, most recently joined first.

    Args:
        club_id: ID of the club
        page: 1-based page number
        page_size: Members per page

    Returns:
        The requested page and the total number of members

    Raises:
        HTTPException: 404 if club not found, 403 if not a member
    """
    verify_club_membership(club_id, current_user.id, db)

    members_query = db.query(
        User.id,
        User.email,
        User.name,
        User.image,
        club_members.c.role,
        club_members.c.status,
        club_members.c.joined_at
    ).join(
        club_members,
        User.id == club_members.c.user_id
    ).filter(
        club_members.c.club_id == club_id
    ).order_by(
        club_members.c.joined_at.desc(),
        User.id.desc()
    ).offset((page - 1) * page_size).limit(page_size).all()

    total = db.execute(
        select(func.count()).select_from(club_members).where(
            club_members.c.club_id == club_id
        )
    ).scalar() or 0

    members = [
        ClubMemberResponse(
            id=member.id,
            email=member.email,
            name=member.name,
            image=member.image,
            role=member.role,
            status=member.status,
            joined_at=member.joined_at
        )
        for member in members_query
    ]

    return ClubMemberPage(members=members, total=total, page=page, page_size=page_size)


def remove_membership(club: Club, user_id: int, db: Session) -> None:
    """Delete a membership row and keep the club's member count in step."""
    db.execute(
        delete(club_members).where(
            club_members.c.club_id == club.id,
            club_members.c.user_id == user_id
        )
    )
    club.member_count = max(club.member_count - 1, 0)
    db.commit()


@router.delete("/{club_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
def leave_club(
    club_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Leave a club (self-removal).

    Owners cannot leave their own club; they can only delete it.

    Raises:
        HTTPException: 404 if club not found, 403 if not a member, 400 if owner
    """
    club = verify_club_membership(club_id, current_user.id, db)

    if club.owner_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot leave a club you own"
        )

    remove_membership(club, current_user.id, db)
    return None


@router.delete("/{club_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    club_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Remove a member from a club (admin-only).

    Raises:
        HTTPException: 403 if not admin, 404 if target not a member, 400 if target is the owner
    """
    club = verify_club_membership(club_id, current_user.id, db)

    if get_member_role(club_id, current_user.id, db) != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only club admins can remove members"
        )

    if get_member_role(club_id, user_id, db) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User is not a member of this club"
        )

    if user_id == club.owner_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The club owner cannot be removed"
        )

    remove_membership(club, user_id, db)
    return None


@router.delete("/{club_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_club(
    club_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a club (owner-only). Memberships, events, stats and the invite code go with it.

    Raises:
        HTTPException: 404 if club not found, 403 if not the owner
    """
    club = verify_club_owner(club_id, current_user.id, db, action="delete")

    db.delete(club)
    db.commit()
    logger.info("Deleted club %d", club_id)
    return None
