"""Pydantic schemas for ClubStat model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClubStatBase(BaseModel):
    """Base stat schema with common fields."""
    label: str = Field(min_length=1, max_length=50)
    value: str = Field(min_length=1, max_length=50)
    unit: str = Field(max_length=20)


class ClubStatCreate(ClubStatBase):
    """Schema for adding a stat to a club."""
    icon: Optional[str] = Field(None, max_length=50)


class ClubStatUpdate(ClubStatBase):
    """Schema for replacing a stat's values."""
    icon: Optional[str] = Field(None, max_length=50)


class ClubStatResponse(ClubStatBase):
    """Schema for stat responses."""
    id: int
    club_id: int
    icon: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
