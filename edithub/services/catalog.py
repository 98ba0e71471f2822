# edithub/services/catalog.py
from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta
from typing import Optional

import httpx
from sqlalchemy import exists, select, update
from sqlalchemy.orm import Session

from edithub.core.errors import NotFound, ValidationFailed
from edithub.models.access_code import AccessCode
from edithub.models.client import Client
from edithub.models.group import VideoGroup
from edithub.models.video import Video
from edithub.services import streamable

logger = logging.getLogger(__name__)

# Choices offered by the upload form; any positive integer is accepted.
EXPIRY_CHOICES = {
    None: "Never expires",
    1: "1 day",
    3: "3 days",
    7: "1 week",
    14: "2 weeks",
    30: "1 month",
    90: "3 months",
}


def expires_at_from_days(days: int | None, now: datetime | None = None) -> datetime | None:
    if not days:
        return None
    if days < 0:
        raise ValidationFailed("Expiry must be a positive number of days")
    return (now or datetime.utcnow()) + timedelta(days=days)


def new_link_video_id() -> str:
    return f"VID_{int(time.time() * 1000)}"


def code_in_use(db: Session, code: str) -> bool:
    """True when ``code`` already unlocks something, in any credential table."""
    return bool(
        db.scalar(select(exists().where(AccessCode.code == code)))
        or db.scalar(select(exists().where(Client.access_code == code)))
        or db.scalar(select(exists().where(VideoGroup.access_code == code)))
    )


def _require_group(db: Session, group_id: int | None) -> VideoGroup:
    if not group_id:
        raise ValidationFailed("Please select a group")
    group = db.get(VideoGroup, group_id)
    if not group:
        raise NotFound("Group not found")
    return group


def _require_text(value: str | None, message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationFailed(message)
    return value


# ── Videos ────────────────────────────────────────────────

def create_link_video(
    db: Session,
    *,
    name: str,
    link: str,
    group_id: int,
    description: Optional[str] = None,
    expires_in_days: Optional[int] = None,
    added_by: Optional[str] = None,
) -> Video:
    name = _require_text(name, "Please enter a video name")
    link = _require_text(link, "Please enter a video link")
    _require_group(db, group_id)

    v = Video(
        video_id=new_link_video_id(),
        name=name,
        description=(description or "").strip() or None,
        link=link,
        group_id=group_id,
        expires_at=expires_at_from_days(expires_in_days),
        is_active=True,
        added_by=added_by,
    )
    db.add(v)
    db.commit()
    db.refresh(v)
    logger.info("Video %s added to group %s", v.id, group_id)
    return v


def upload_streamable_video(
    db: Session,
    *,
    source_url: str,
    name: str,
    group_id: int,
    description: Optional[str] = None,
    expires_in_days: Optional[int] = None,
    added_by: Optional[str] = None,
    client: httpx.Client | None = None,
) -> Video:
    """
    Import ``source_url`` into Streamable, then record the video.

    Validation runs before the network call. The row is inserted only after
    Streamable accepted the import; a StreamableError leaves the database
    untouched.
    """
    name = _require_text(name, "Please enter a video name")
    source_url = _require_text(source_url, "Video URL is required")
    _require_group(db, group_id)
    expires_at = expires_at_from_days(expires_in_days)

    uploaded = streamable.import_video(source_url, name, client=client)

    v = Video(
        video_id=uploaded.shortcode,
        name=name,
        description=(description or "").strip() or None,
        link=uploaded.url,
        thumbnail_url=uploaded.thumbnail_url,
        duration=uploaded.duration,
        group_id=group_id,
        expires_at=expires_at,
        is_active=True,
        added_by=added_by,
    )
    db.add(v)
    db.commit()
    db.refresh(v)
    logger.info("Streamable video %s stored as %s", uploaded.shortcode, v.id)
    return v


def cleanup_expired_videos(db: Session, now: datetime | None = None, hard_delete: bool = False) -> int:
    """Deactivate (or delete) every video past its expiry. Returns the row count."""
    now = now or datetime.utcnow()
    expired = (Video.expires_at.is_not(None)) & (Video.expires_at <= now)

    if hard_delete:
        rows = db.scalars(select(Video).where(expired)).all()
        for v in rows:
            db.delete(v)
        count = len(rows)
    else:
        result = db.execute(
            update(Video)
            .where(expired, Video.is_active == True)  # noqa: E712
            .values(is_active=False, updated_at=now)
        )
        count = result.rowcount or 0

    db.commit()
    if count:
        logger.info("Expired videos cleaned up: %d (hard_delete=%s)", count, hard_delete)
    return count


# ── Groups ────────────────────────────────────────────────

def create_group(
    db: Session,
    *,
    name: str,
    access_code: str,
    description: Optional[str] = None,
    created_by: Optional[str] = None,
) -> VideoGroup:
    name = _require_text(name, "Please enter a group name")
    access_code = _require_text(access_code, "Please enter an access code")
    if code_in_use(db, access_code):
        raise ValidationFailed("Access code already in use")

    g = VideoGroup(
        name=name,
        access_code=access_code,
        description=(description or "").strip() or None,
        created_by=created_by,
    )
    db.add(g)
    db.commit()
    db.refresh(g)
    return g


def delete_group(db: Session, group: VideoGroup) -> None:
    # Videos and their feedback cascade; clients stay with group_id nulled
    db.delete(group)
    db.commit()
