# edithub/api/feedback_api.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from edithub.core.database import get_db
from edithub.core.roles import require_client, require_elevated
from edithub.models.feedback import Feedback
from edithub.models.video import Video
from edithub.schemas.feedback import FeedbackCreate, FeedbackOut
from edithub.services.session import Identity
from edithub.services.visibility import list_visible

router = APIRouter(prefix="/videos", tags=["feedback"])


def _visible_video(db: Session, video_id: int, identity: Identity) -> Video:
    v = db.query(Video).filter(Video.id == video_id).first()
    if not v or not list_visible([v], identity):
        raise HTTPException(status_code=404, detail="Video not found")
    return v


@router.post("/{video_id}/feedback", response_model=FeedbackOut)
def add_feedback(
    video_id: int,
    payload: FeedbackCreate,
    identity: Identity = Depends(require_client),
    db: Session = Depends(get_db),
) -> FeedbackOut:
    v = _visible_video(db, video_id, identity)

    comment = payload.comment.strip()
    if not comment:
        raise HTTPException(status_code=400, detail="Please enter a comment")
    if v.duration and payload.timestamp_seconds > v.duration:
        raise HTTPException(status_code=400, detail="Timestamp is past the end of the video")

    f = Feedback(
        video_id=v.id,
        client_code=identity.code,
        timestamp_seconds=payload.timestamp_seconds,
        comment=comment,
    )
    db.add(f)
    db.commit()
    db.refresh(f)
    return FeedbackOut.model_validate(f)


@router.get("/{video_id}/feedback", response_model=List[FeedbackOut])
def list_feedback(
    video_id: int,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
) -> List[FeedbackOut]:
    """Every comment on a video, in timeline order. Inactive and expired videos included."""
    v = db.query(Video).filter(Video.id == video_id).first()
    if not v:
        raise HTTPException(status_code=404, detail="Video not found")

    rows = (
        db.query(Feedback)
        .filter(Feedback.video_id == v.id)
        .order_by(Feedback.timestamp_seconds.asc(), Feedback.id.asc())
        .all()
    )
    return [FeedbackOut.model_validate(f) for f in rows]
