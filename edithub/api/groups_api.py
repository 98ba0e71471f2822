# edithub/api/groups_api.py
from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from edithub.core.database import get_db
from edithub.core.roles import require_elevated, require_identity
from edithub.models.group import VideoGroup
from edithub.schemas.catalog import GroupAdminOut, GroupCreate, GroupOut, GroupUpdate
from edithub.services import catalog
from edithub.services.realtime import notifier
from edithub.services.session import Identity

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/")
def list_groups(
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    # Clients only ever see their own group, and never its code
    if not identity.role.is_elevated:
        if identity.scope is None:
            return []
        g = db.query(VideoGroup).filter(VideoGroup.id == identity.scope).first()
        return [GroupOut.model_validate(g).model_dump(mode="json")] if g else []

    groups = db.query(VideoGroup).order_by(VideoGroup.name.asc()).all()
    return [GroupAdminOut.model_validate(g).model_dump(mode="json") for g in groups]


@router.post("/", response_model=GroupAdminOut)
def create_group(
    payload: GroupCreate,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    g = catalog.create_group(
        db,
        name=payload.name,
        access_code=payload.access_code,
        description=payload.description,
        created_by=identity.code,
    )
    return GroupAdminOut.model_validate(g)


@router.patch("/{group_id}", response_model=GroupAdminOut)
def update_group(
    group_id: int,
    payload: GroupUpdate,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    g = db.query(VideoGroup).filter(VideoGroup.id == group_id).first()
    if not g:
        raise HTTPException(status_code=404, detail="Group not found")

    if payload.name is not None:
        g.name = payload.name.strip()
    if payload.description is not None:
        g.description = payload.description.strip() or None

    db.commit()
    db.refresh(g)
    return GroupAdminOut.model_validate(g)


@router.delete("/{group_id}")
def delete_group(
    group_id: int,
    background: BackgroundTasks,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    g = db.query(VideoGroup).filter(VideoGroup.id == group_id).first()
    if not g:
        raise HTTPException(status_code=404, detail="Group not found")

    catalog.delete_group(db, g)
    background.add_task(notifier.broadcast, "group_deleted")
    return {"ok": True}
