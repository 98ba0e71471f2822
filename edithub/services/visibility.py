# edithub/services/visibility.py
from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from edithub.core.config import settings
from edithub.models.video import Video
from edithub.services.session import Identity


def is_expired(video: Video, now: datetime | None = None) -> bool:
    if video.expires_at is None:
        return False
    return video.expires_at <= (now or datetime.utcnow())


def _matches_search(video: Video, search: str) -> bool:
    needle = search.lower()
    return needle in (video.name or "").lower() or needle in (video.description or "").lower()


def list_visible(
    catalog: Iterable[Video],
    identity: Identity | None,
    now: datetime | None = None,
    group_id: Optional[int] = None,
    search: Optional[str] = None,
    admin_sees_expired: Optional[bool] = None,
) -> List[Video]:
    """
    Videos the identity may see, newest first.

    Elevated roles see every active video (``group_id`` only narrows the view).
    Clients see the active videos of their own group and nothing when no group
    is assigned. Expired videos are hidden for everyone unless
    ``admin_sees_expired`` is on, which only affects elevated roles.
    """
    if identity is None:
        return []

    now = now or datetime.utcnow()
    if admin_sees_expired is None:
        admin_sees_expired = settings.ADMIN_SEES_EXPIRED

    if identity.role.is_elevated:
        allowed_group = group_id
        hide_expired = not admin_sees_expired
    else:
        if identity.scope is None:
            return []
        allowed_group = identity.scope
        hide_expired = True

    visible = []
    for video in catalog:
        if not video.is_active:
            continue
        if allowed_group is not None and video.group_id != allowed_group:
            continue
        if hide_expired and is_expired(video, now):
            continue
        if search and not _matches_search(video, search):
            continue
        visible.append(video)

    # sorted() is stable, equal timestamps keep catalog order
    return sorted(visible, key=lambda v: v.created_at, reverse=True)


def load_visible(
    db: Session,
    identity: Identity | None,
    group_id: Optional[int] = None,
    search: Optional[str] = None,
) -> List[Video]:
    """Fetch the candidate rows and apply ``list_visible``."""
    if identity is None:
        return []
    if not identity.role.is_elevated and identity.scope is None:
        return []

    stmt = (
        select(Video)
        .options(selectinload(Video.group))
        .where(Video.is_active == True)  # noqa: E712
        .order_by(Video.id.asc())
    )
    if not identity.role.is_elevated:
        stmt = stmt.where(Video.group_id == identity.scope)
    elif group_id is not None:
        stmt = stmt.where(Video.group_id == group_id)

    catalog = db.scalars(stmt).all()
    return list_visible(catalog, identity, group_id=group_id, search=search)


def load_managed(
    db: Session,
    group_id: Optional[int] = None,
    search: Optional[str] = None,
) -> List[Video]:
    """
    Every video row for the admin catalog, newest first.

    Inactive and expired rows are included so they can be reactivated,
    re-dated or deleted. Callers must already hold an elevated identity.
    """
    stmt = select(Video).options(selectinload(Video.group))
    if group_id is not None:
        stmt = stmt.where(Video.group_id == group_id)
    stmt = stmt.order_by(Video.created_at.desc(), Video.id.asc())

    rows = db.scalars(stmt).all()
    if search:
        rows = [v for v in rows if _matches_search(v, search)]
    return list(rows)
