# edithub/api/codes_api.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from edithub.core.database import get_db
from edithub.core.roles import Role, require_code_manager
from edithub.models.access_code import AccessCode
from edithub.schemas.catalog import AccessCodeCreate, AccessCodeOut, AccessCodeUpdate
from edithub.services.catalog import code_in_use
from edithub.services.session import Identity

router = APIRouter(prefix="/access-codes", tags=["access-codes"])


def _check_grant(identity: Identity, role: Role | None) -> None:
    if role is Role.MAIN_ADMIN and identity.role is not Role.MAIN_ADMIN:
        raise HTTPException(status_code=403, detail="Only main_admin can grant main_admin")


@router.get("/", response_model=List[AccessCodeOut])
def list_codes(
    identity: Identity = Depends(require_code_manager),
    db: Session = Depends(get_db),
):
    codes = db.query(AccessCode).order_by(AccessCode.id.asc()).all()
    return [AccessCodeOut.model_validate(c) for c in codes]


@router.post("/", response_model=AccessCodeOut)
def create_code(
    payload: AccessCodeCreate,
    identity: Identity = Depends(require_code_manager),
    db: Session = Depends(get_db),
):
    _check_grant(identity, payload.role)

    code = payload.code.strip()
    if not code:
        raise HTTPException(status_code=400, detail="Please enter an access code")
    if code_in_use(db, code):
        raise HTTPException(status_code=400, detail="Access code already in use")

    row = AccessCode(
        code=code,
        role=payload.role.value,
        is_active=True,
        assigned_to_email=(payload.assigned_to_email or "").strip() or None,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return AccessCodeOut.model_validate(row)


@router.patch("/{code_id}", response_model=AccessCodeOut)
def update_code(
    code_id: int,
    payload: AccessCodeUpdate,
    identity: Identity = Depends(require_code_manager),
    db: Session = Depends(get_db),
):
    row = db.query(AccessCode).filter(AccessCode.id == code_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Access code not found")

    # Editing an existing main_admin code needs main_admin too
    if row.role == Role.MAIN_ADMIN.value:
        _check_grant(identity, Role.MAIN_ADMIN)
    _check_grant(identity, payload.role)

    if payload.role is not None:
        row.role = payload.role.value
    if payload.is_active is not None:
        if row.code == identity.code and not payload.is_active:
            raise HTTPException(status_code=400, detail="Cannot deactivate your own code")
        row.is_active = payload.is_active
    if payload.assigned_to_email is not None:
        row.assigned_to_email = payload.assigned_to_email.strip() or None

    db.commit()
    db.refresh(row)
    return AccessCodeOut.model_validate(row)


@router.delete("/{code_id}")
def delete_code(
    code_id: int,
    identity: Identity = Depends(require_code_manager),
    db: Session = Depends(get_db),
):
    row = db.query(AccessCode).filter(AccessCode.id == code_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Access code not found")
    if row.code == identity.code:
        raise HTTPException(status_code=400, detail="Cannot delete your own code")
    if row.role == Role.MAIN_ADMIN.value:
        _check_grant(identity, Role.MAIN_ADMIN)

    db.delete(row)
    db.commit()
    return {"ok": True}
