# edithub/models/access_code.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime

from edithub.core.database import Base


class AccessCode(Base):
    __tablename__ = "access_codes"

    id                = Column(Integer, primary_key=True, index=True)
    code              = Column(String(120), unique=True, index=True, nullable=False)

    # main_admin/admin/moderator/client, see edithub.core.roles.Role
    role              = Column(String(32), nullable=False)
    is_active         = Column(Boolean, default=True, nullable=False)
    assigned_to_email = Column(String(255), nullable=True)

    created_at        = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at        = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
