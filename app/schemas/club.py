"""Pydantic schemas for Club model."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClubBase(BaseModel):
    """Base club schema with common fields."""
    name: str = Field(min_length=3, max_length=50)
    sport: str
    description: str = Field(min_length=10, max_length=500)
    location: str
    privacy: Literal["public", "private", "restricted"]
    meeting_days: List[str] = []
    meeting_time: str
    skill_level: str
    age_group: str


class ClubCreate(ClubBase):
    """Schema for creating a new club."""
    logo: Optional[str] = None


class ClubUpdate(BaseModel):
    """Schema for editing club information. Only the fields sent are changed."""
    name: Optional[str] = Field(None, min_length=3, max_length=50)
    sport: Optional[str] = None
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    location: Optional[str] = None
    privacy: Optional[Literal["public", "private", "restricted"]] = None
    meeting_days: Optional[List[str]] = None
    meeting_time: Optional[str] = None
    skill_level: Optional[str] = None
    age_group: Optional[str] = None
    logo: Optional[str] = None

    @field_validator("name", "sport", "location", "privacy", "meeting_days", mode="before")
    @classmethod
    def required_fields_not_null(cls, value):
        if value is None:
            raise ValueError("This field cannot be cleared")
        return value


class ClubResponse(BaseModel):
    """Schema for club responses shown to members (includes the invite code)."""
    id: int
    name: str
    sport: str
    description: Optional[str]
    location: Optional[str]
    privacy: str
    meeting_days: List[str]
    meeting_time: Optional[str]
    skill_level: Optional[str]
    age_group: Optional[str]
    logo: Optional[str]
    invite_code: str
    member_count: int
    total_events: int
    active_events: int
    owner_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClubJoin(BaseModel):
    """Schema for joining a club via invite code."""
    invite_code: str = Field(min_length=1, max_length=20)


class ClubMemberResponse(BaseModel):
    """Schema for club member information."""
    id: int
    email: str
    name: str
    role: str
    status: str
    image: Optional[str] = None
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClubMemberPage(BaseModel):
    """One page of a club's member list."""
    members: List[ClubMemberResponse]
    total: int
    page: int
    page_size: int


class PublicClub(BaseModel):
    """A club as listed on the discovery page."""
    id: int
    name: str
    sport: str
    description: str
    location: str
    members: int
    meeting_days: List[str]
    skill_level: str
    age_group: str
    logo: Optional[str] = None
    owner: str
    owner_image: Optional[str] = None
    created: str


class PublicClubPage(BaseModel):
    """One page of discovery results."""
    clubs: List[PublicClub]
    total: int
    has_more: bool
    next_page: Optional[int] = None
