from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from edithub.core.roles import Role


# ── Groups ────────────────────────────────────────────────
class GroupCreate(BaseModel):
    name:        str = Field(..., min_length=1, max_length=200)
    access_code: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = Field(default=None, max_length=1000)


class GroupUpdate(BaseModel):
    name:        Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)


class GroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:          int
    name:        str
    description: Optional[str]
    created_at:  datetime


class GroupAdminOut(GroupOut):
    access_code: str


# ── Clients ───────────────────────────────────────────────
class ClientCreate(BaseModel):
    client_name: str = Field(..., min_length=1, max_length=200)
    access_code: str = Field(..., min_length=1, max_length=120)
    group_id:    Optional[int] = None


class ClientUpdate(BaseModel):
    client_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    group_id:    Optional[int] = None
    unassign:    bool = False
    is_active:   Optional[bool] = None


class ClientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:          int
    client_name: str
    access_code: str
    group_id:    Optional[int]
    is_active:   bool
    created_at:  datetime


# ── Access codes ──────────────────────────────────────────
class AccessCodeCreate(BaseModel):
    code:              str  = Field(..., min_length=1, max_length=120)
    role:              Role = Role.MODERATOR
    assigned_to_email: Optional[str] = Field(default=None, max_length=255)


class AccessCodeUpdate(BaseModel):
    role:              Optional[Role] = None
    is_active:         Optional[bool] = None
    assigned_to_email: Optional[str] = Field(default=None, max_length=255)


class AccessCodeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:                int
    code:              str
    role:              str
    is_active:         bool
    assigned_to_email: Optional[str]
    created_at:        datetime


# ── Videos ────────────────────────────────────────────────
class VideoCreate(BaseModel):
    name:            str = Field(..., min_length=1, max_length=200)
    link:            str = Field(..., min_length=1, max_length=1000)
    group_id:        int
    description:     Optional[str] = Field(default=None, max_length=2000)
    expires_in_days: Optional[int] = Field(default=None, ge=0)


class StreamableUploadIn(BaseModel):
    source_url:      str = Field(..., min_length=1, max_length=1000)
    name:            str = Field(..., min_length=1, max_length=200)
    group_id:        int
    description:     Optional[str] = Field(default=None, max_length=2000)
    expires_in_days: Optional[int] = Field(default=None, ge=0)


class VideoUpdate(BaseModel):
    name:            Optional[str] = Field(default=None, min_length=1, max_length=200)
    description:     Optional[str] = Field(default=None, max_length=2000)
    link:            Optional[str] = Field(default=None, min_length=1, max_length=1000)
    group_id:        Optional[int] = None
    is_active:       Optional[bool] = None
    expires_in_days: Optional[int] = Field(default=None, ge=0)
    clear_expiry:    bool = False


class VideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:            int
    video_id:      str
    name:          str
    description:   Optional[str]
    link:          str
    group_id:      int
    group_name:    Optional[str] = None
    thumbnail_url: Optional[str]
    duration:      Optional[int]
    expires_at:    Optional[datetime]
    days_left:     Optional[int] = None
    is_active:     bool
    created_at:    datetime

    @classmethod
    def from_orm_ext(cls, v, now: datetime | None = None) -> "VideoOut":
        days_left = None
        if v.expires_at is not None:
            seconds = (v.expires_at - (now or datetime.utcnow())).total_seconds()
            days_left = math.ceil(seconds / 86400)
        return cls(
            id=v.id,
            video_id=v.video_id,
            name=v.name,
            description=v.description,
            link=v.link,
            group_id=v.group_id,
            group_name=v.group.name if v.group else None,
            thumbnail_url=v.thumbnail_url,
            duration=v.duration,
            expires_at=v.expires_at,
            days_left=days_left,
            is_active=v.is_active,
            created_at=v.created_at,
        )


class CleanupOut(BaseModel):
    affected:    int
    hard_delete: bool
