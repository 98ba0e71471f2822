# edithub/api/clients_api.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from edithub.core.database import get_db
from edithub.core.roles import require_elevated
from edithub.models.client import Client
from edithub.models.group import VideoGroup
from edithub.schemas.catalog import ClientCreate, ClientOut, ClientUpdate
from edithub.services.catalog import code_in_use
from edithub.services.session import Identity

router = APIRouter(prefix="/clients", tags=["clients"])


def _check_group(db: Session, group_id: int | None) -> None:
    if group_id is not None and not db.query(VideoGroup).filter(VideoGroup.id == group_id).first():
        raise HTTPException(status_code=404, detail="Group not found")


@router.get("/", response_model=List[ClientOut])
def list_clients(
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    clients = db.query(Client).order_by(Client.created_at.desc(), Client.id.desc()).all()
    return [ClientOut.model_validate(c) for c in clients]


@router.post("/", response_model=ClientOut)
def create_client(
    payload: ClientCreate,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    code = payload.access_code.strip()
    if not code:
        raise HTTPException(status_code=400, detail="Please enter an access code")
    if code_in_use(db, code):
        raise HTTPException(status_code=400, detail="Access code already in use")
    _check_group(db, payload.group_id)

    c = Client(
        client_name=payload.client_name.strip(),
        access_code=code,
        group_id=payload.group_id,
        is_active=True,
    )
    db.add(c)
    db.commit()
    db.refresh(c)
    return ClientOut.model_validate(c)


@router.patch("/{client_id}", response_model=ClientOut)
def update_client(
    client_id: int,
    payload: ClientUpdate,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    c = db.query(Client).filter(Client.id == client_id).first()
    if not c:
        raise HTTPException(status_code=404, detail="Client not found")

    if payload.client_name is not None:
        c.client_name = payload.client_name.strip()
    if payload.unassign:
        c.group_id = None
    elif payload.group_id is not None:
        _check_group(db, payload.group_id)
        c.group_id = payload.group_id
    if payload.is_active is not None:
        c.is_active = payload.is_active

    db.commit()
    db.refresh(c)
    return ClientOut.model_validate(c)


@router.delete("/{client_id}")
def delete_client(
    client_id: int,
    identity: Identity = Depends(require_elevated),
    db: Session = Depends(get_db),
):
    c = db.query(Client).filter(Client.id == client_id).first()
    if not c:
        raise HTTPException(status_code=404, detail="Client not found")

    db.delete(c)
    db.commit()
    return {"ok": True}
