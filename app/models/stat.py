from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


class ClubStat(Base):
    """Custom headline figure shown on a club's page, e.g. "Trophies: 12"."""

    __tablename__ = "club_stats"

    id = Column(Integer, primary_key=True, index=True)
    club_id = Column(Integer, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String(50), nullable=False)
    value = Column(String(50), nullable=False)
    unit = Column(String(20), nullable=False)
    icon = Column(String(50), default="Activity", nullable=False)  # UI icon name
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    club = relationship("Club", back_populates="stats")
