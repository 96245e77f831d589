from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table, JSON
from sqlalchemy.orm import relationship

from app.database import Base


# Association table for many-to-many relationship between users and clubs
club_members = Table(
    "club_members",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("club_id", Integer, ForeignKey("clubs.id", ondelete="CASCADE"), primary_key=True),
    Column("joined_at", DateTime, default=datetime.utcnow, nullable=False),
    Column("role", String(20), default="member", nullable=False),  # 'admin' or 'member'
    Column("status", String(20), default="active", nullable=False),
)


class Club(Base):
    """Club model representing a sports club."""

    __tablename__ = "clubs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    sport = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    privacy = Column(String(20), default="public", nullable=False, index=True)  # public, private, restricted
    meeting_days = Column(JSON, default=list, nullable=False)
    meeting_time = Column(String(50), nullable=True)
    skill_level = Column(String(50), nullable=True)
    age_group = Column(String(50), nullable=True)
    logo = Column(String(500), nullable=True)
    # Unique index is what ultimately guarantees one club per code
    invite_code = Column(String(20), unique=True, index=True, nullable=False)
    # Denormalized so discovery can sort by popularity
    member_count = Column(Integer, default=0, nullable=False)
    total_events = Column(Integer, default=0, nullable=False)
    active_events = Column(Integer, default=0, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    # Many-to-many with users through club_members association table
    members = relationship(
        "User",
        secondary=club_members,
        back_populates="clubs",
    )

    # Many-to-one with owner
    owner = relationship("User", foreign_keys=[owner_id])

    # One-to-many with events and custom stats
    events = relationship("Event", back_populates="club", cascade="all, delete-orphan")
    stats = relationship("ClubStat", back_populates="club", cascade="all, delete-orphan")
