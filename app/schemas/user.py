"""Pydantic schemas for User model."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator

from app.core.security import MAX_PASSWORD_BYTES


class UserBase(BaseModel):
    """Base user schema with common fields."""
    email: EmailStr
    name: str = Field(min_length=1, max_length=100)


class UserCreate(UserBase):
    """Schema for creating a new user."""
    password: str = Field(min_length=6, max_length=128)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class UserResponse(UserBase):
    """Schema for user responses (excludes password)."""
    id: int
    image: Optional[str] = None
    dashboard_view: str
    onboarding: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DashboardViewUpdate(BaseModel):
    """Schema for switching between the owner and member dashboards."""
    dashboard_view: Literal["owner", "member"]


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
