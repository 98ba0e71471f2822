# edithub/models/group.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from edithub.core.database import Base


class VideoGroup(Base):
    __tablename__ = "groups"

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String(200), nullable=False)

    # Shared viewer-level code for the whole group
    access_code = Column(String(120), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)

    created_by  = Column(String(120), nullable=True)   # code of the admin who created it
    created_at  = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at  = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    videos  = relationship("Video", back_populates="group", cascade="all, delete-orphan")
    clients = relationship("Client", back_populates="group")
