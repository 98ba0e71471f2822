# edithub/models/video.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from edithub.core.database import Base


class Video(Base):
    __tablename__ = "videos"

    id            = Column(Integer, primary_key=True, index=True)
    video_id      = Column(String(64), nullable=False, index=True)   # Streamable shortcode or VID_<ms>

    name          = Column(String(200), nullable=False)
    description   = Column(Text, nullable=True)
    link          = Column(String(1000), nullable=False)             # iframe src / playback URL

    group_id      = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    group         = relationship("VideoGroup", back_populates="videos")

    thumbnail_url = Column(String(1000), nullable=True)
    duration      = Column(Integer, nullable=True)                   # seconds

    expires_at    = Column(DateTime, nullable=True, index=True)      # None = never
    is_active     = Column(Boolean, default=True, nullable=False)

    added_by      = Column(String(120), nullable=True)
    created_at    = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at    = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    feedback      = relationship("Feedback", back_populates="video", cascade="all, delete-orphan")
