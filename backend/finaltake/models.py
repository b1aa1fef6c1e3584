"""
FinalTake — SQLAlchemy Models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from finaltake.database import Base


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(40), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class ProfileMovie(Base):
    """One movie on one of a profile's lists ('liked' or 'watch_later')."""
    __tablename__ = "profile_movies"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)
    tmdb_id = Column(Integer, nullable=False)
    list_name = Column(String(20), nullable=False)
    added_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_profile_movies_entry", "profile_id", "list_name", "tmdb_id", unique=True),
    )
