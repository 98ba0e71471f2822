# edithub/api/access_api.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from edithub.core.database import get_db
from edithub.core.roles import require_identity
from edithub.schemas.access import IdentityOut, SignInIn, SignInOut
from edithub.services.access import resolve
from edithub.services.session import Identity, SessionHolder

router = APIRouter(prefix="/access", tags=["access"])


def identity_out(identity: Identity) -> IdentityOut:
    return IdentityOut(
        role=identity.role.value,
        scope=identity.scope,
        name=identity.name,
        is_global=identity.is_global,
        is_admin=identity.role.is_elevated,
    )


@router.post("/sign-in", response_model=SignInOut)
def sign_in(payload: SignInIn, request: Request, db: Session = Depends(get_db)):
    result = resolve(db, payload.code)

    if not result.success:
        if result.retryable:
            return JSONResponse({"detail": result.reason, "retryable": True}, status_code=503)
        status = 400 if not payload.code else 401
        raise HTTPException(status_code=status, detail=result.reason)

    identity = SessionHolder(request.session).establish(result.identity)
    return SignInOut(success=True, identity=identity_out(identity))


@router.post("/sign-out")
def sign_out(request: Request):
    SessionHolder(request.session).clear()
    return {"ok": True}


@router.get("/me", response_model=IdentityOut)
def me(identity: Identity = Depends(require_identity)):
    return identity_out(identity)
