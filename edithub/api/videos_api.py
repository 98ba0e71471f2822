# edithub/api/videos_api.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from edithub.core.database import get_db
from edithub.core.roles import require_elevated, require_identity
from edithub.models.group import VideoGroup
from edithub.models.video import Video
from edithub.schemas.catalog import (
    CleanupOut,
    StreamableUploadIn,
    VideoCreate,
    VideoOut,
    VideoUpdate,
)
from edithub.services import catalog
from edithub.services.realtime import notifier
from edithub.services.session import Identity
from edithub.services.visibility import list_visible, load_managed, load_visible

router = APIRouter(prefix="/videos", tags=["videos"])


# ── Endpoints ──────────────────────────────────────────────
@router.get("/", response_model=List[VideoOut])
def list_videos(
    q: Optional[str] = Query(default=None, max_length=80),
    group_id: Optional[int] = Query(default=None),
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
) -> List[VideoOut]:
    videos = load_visible(db, identity, group_id=group_id, search=q)
    return [VideoOut.from_orm_ext(v) for v in videos]


@router.get("/manage", response_model=List[VideoOut])
def manage_videos(
    q: Optional[str] = Query(default=None, max_length=80),
    group_id: Optional[int] = Query(default=None),
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
) -> List[VideoOut]:
    # Admin catalog: inactive and expired rows included
    videos = load_managed(db, group_id=group_id, search=q)
    return [VideoOut.from_orm_ext(v) for v in videos]


@router.get("/expiry-options")
def expiry_options() -> dict:
    return {"options": [
        {"days": k, "label": v} for k, v in catalog.EXPIRY_CHOICES.items()
    ]}


@router.post("/cleanup-expired", response_model=CleanupOut)
def cleanup_expired(
    background: BackgroundTasks,
    hard_delete: bool = Query(default=False),
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
) -> CleanupOut:
    affected = catalog.cleanup_expired_videos(db, hard_delete=hard_delete)
    if affected:
        background.add_task(notifier.broadcast, "videos_expired")
    return CleanupOut(affected=affected, hard_delete=hard_delete)


@router.post("/streamable", response_model=VideoOut)
def upload_streamable(
    payload: StreamableUploadIn,
    background: BackgroundTasks,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
) -> VideoOut:
    v = catalog.upload_streamable_video(
        db,
        source_url=payload.source_url,
        name=payload.name,
        group_id=payload.group_id,
        description=payload.description,
        expires_in_days=payload.expires_in_days,
        added_by=identity.code,
    )
    background.add_task(notifier.broadcast, "video_created")
    return VideoOut.from_orm_ext(v)


@router.post("/", response_model=VideoOut)
def create_video(
    payload: VideoCreate,
    background: BackgroundTasks,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
) -> VideoOut:
    v = catalog.create_link_video(
        db,
        name=payload.name,
        link=payload.link,
        group_id=payload.group_id,
        description=payload.description,
        expires_in_days=payload.expires_in_days,
        added_by=identity.code,
    )
    background.add_task(notifier.broadcast, "video_created")
    return VideoOut.from_orm_ext(v)


@router.get("/{video_id}", response_model=VideoOut)
def get_video(
    video_id: int,
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
) -> VideoOut:
    v = db.query(Video).filter(Video.id == video_id).first()
    if not v:
        raise HTTPException(status_code=404, detail="Video not found")
    # Admins open any row, viewers only what their gallery shows
    if not identity.role.is_elevated and not list_visible([v], identity):
        raise HTTPException(status_code=404, detail="Video not found")
    return VideoOut.from_orm_ext(v)


@router.patch("/{video_id}", response_model=VideoOut)
def update_video(
    video_id: int,
    payload: VideoUpdate,
    background: BackgroundTasks,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
) -> VideoOut:
    v = db.query(Video).filter(Video.id == video_id).first()
    if not v:
        raise HTTPException(status_code=404, detail="Video not found")

    if payload.group_id is not None:
        if not db.query(VideoGroup).filter(VideoGroup.id == payload.group_id).first():
            raise HTTPException(status_code=404, detail="Group not found")
        v.group_id = payload.group_id

    if payload.name        is not None: v.name        = payload.name.strip()
    if payload.description is not None: v.description = payload.description.strip() or None
    if payload.link        is not None: v.link        = payload.link.strip()
    if payload.is_active   is not None: v.is_active   = payload.is_active

    if payload.clear_expiry:
        v.expires_at = None
    elif payload.expires_in_days is not None:
        v.expires_at = catalog.expires_at_from_days(payload.expires_in_days)

    db.commit()
    db.refresh(v)
    background.add_task(notifier.broadcast, "video_updated")
    return VideoOut.from_orm_ext(v)


@router.delete("/{video_id}")
def delete_video(
    video_id: int,
    background: BackgroundTasks,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    v = db.query(Video).filter(Video.id == video_id).first()
    if not v:
        raise HTTPException(status_code=404, detail="Video not found")

    db.delete(v)
    db.commit()
    background.add_task(notifier.broadcast, "video_deleted")
    return {"ok": True}
