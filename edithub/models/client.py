# edithub/models/client.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from edithub.core.database import Base


class Client(Base):
    __tablename__ = "clients"

    id          = Column(Integer, primary_key=True, index=True)
    client_name = Column(String(200), nullable=False)
    access_code = Column(String(120), unique=True, index=True, nullable=False)

    # None = not assigned yet, such a client sees no videos
    group_id    = Column(Integer, ForeignKey("groups.id", ondelete="SET NULL"), nullable=True, index=True)
    group       = relationship("VideoGroup", back_populates="clients")

    is_active   = Column(Boolean, default=True, nullable=False)

    created_at  = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at  = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
