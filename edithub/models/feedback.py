# edithub/models/feedback.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from edithub.core.database import Base


class Feedback(Base):
    """Append-only comment pinned to a position within a video."""
    __tablename__ = "feedback"

    id                = Column(Integer, primary_key=True, index=True)

    video_id          = Column(Integer, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    video             = relationship("Video", back_populates="feedback")

    client_code       = Column(String(120), nullable=False, index=True)
    timestamp_seconds = Column(Integer, nullable=False, default=0)
    comment           = Column(Text, nullable=False)

    created_at        = Column(DateTime, default=datetime.utcnow, nullable=False)
