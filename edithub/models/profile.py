# edithub/models/profile.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime

from edithub.core.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id            = Column(Integer, primary_key=True, index=True)
    email         = Column(String(255), unique=True, index=True, nullable=False)
    display_name  = Column(String(120), nullable=True)
    password_hash = Column(String(255), nullable=False)

    created_at    = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
